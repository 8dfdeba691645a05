"""Global fixtures for the sharpscaffold test suite."""

from pathlib import Path

import pytest

from sharpscaffold.adapters.io.enhanced_logging import LoggerManager
from sharpscaffold.domain.models import (
    Constructor,
    Method,
    Parameter,
    ReturnType,
    SourceClass,
    SourceFile,
    UsingDirective,
    Visibility,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the directory holding the C# fixture files."""
    return FIXTURES_DIR


@pytest.fixture
def test_class1_source() -> str:
    return (FIXTURES_DIR / "TestClass1.cs").read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def reset_logging():
    """Remove the Rich handler installed by CLI tests."""
    yield
    LoggerManager.reset()


def make_method(
    name: str,
    returns: str = "void",
    params: list[tuple[str, str]] | None = None,
    is_async: bool = False,
    visibility: Visibility = Visibility.PUBLIC,
    is_static: bool = False,
) -> Method:
    """Build a Method from ``(type, name)`` parameter pairs."""
    return Method(
        name=name,
        parameters=[Parameter(name=n, type_name=t) for t, n in params or []],
        return_type=ReturnType.from_type_name(returns),
        is_async=is_async,
        visibility=visibility,
        is_static=is_static,
    )


def make_constructor(params: list[tuple[str, str]]) -> Constructor:
    return Constructor(
        parameters=[Parameter(name=n, type_name=t) for t, n in params],
        visibility=Visibility.PUBLIC,
    )


@pytest.fixture
def test_class1_model() -> SourceFile:
    """The structural model of fixtures/TestClass1.cs built by hand."""
    cls = SourceClass(
        name="TestClass1",
        namespace="TestsGeneratorLib.Tests",
        methods=[
            make_method("TestMethod1", params=[("int", "a")]),
            make_method("TestMethod2", "Guid", [("Guid", "id"), ("object", "obj")]),
            make_method("TestMethod3", "Task", is_async=True),
            make_method("TestMethod4", "Task<Uri>", [("Uri", "uri")], is_async=True),
        ],
    )
    return SourceFile(
        namespace="TestsGeneratorLib.Tests",
        usings=[UsingDirective(name="System"), UsingDirective(name="System.Threading.Tasks")],
        classes=[cls],
    )
