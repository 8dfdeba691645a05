"""Tests for dependency injection scaffolding."""

import pytest

from conftest import make_constructor
from sharpscaffold.application.generation.services.dependency_injection import (
    DependencyInjectionScaffolder,
    is_mockable_interface,
    select_biggest_constructor,
    sut_field_name,
)
from sharpscaffold.adapters.rendering.csharp_renderer import CSharpRenderer
from sharpscaffold.domain.models import SourceClass, TypeRef


def render_body(constructor):
    renderer = CSharpRenderer()
    return [renderer._statement(statement) for statement in constructor.body]


class TestHeuristics:
    """Test the naming heuristics."""

    @pytest.mark.parametrize(
        "type_name,expected",
        [
            ("IEnumerable", True),
            ("ICollection<int>", True),
            ("IOrderRepository", True),
            ("Clock", False),
            ("Item", False),
            ("Iterator", False),
            ("int", False),
            ("IOStream", True),
        ],
    )
    def test_is_mockable_interface(self, type_name, expected):
        assert is_mockable_interface(type_name) is expected

    def test_sut_field_name_is_lower_camel(self):
        assert sut_field_name("OrderService") == "_orderService"
        assert sut_field_name("X") == "_x"

    def test_biggest_constructor_first_wins_ties(self):
        first = make_constructor([("int", "a"), ("int", "b")])
        second = make_constructor([("string", "c"), ("string", "d")])
        smaller = make_constructor([("int", "a")])

        assert select_biggest_constructor([smaller, first, second]) is first
        assert select_biggest_constructor([]) is None


class TestDependencyInjectionScaffolder:
    """Test fields and setup constructor generation."""

    def setup_method(self):
        self.scaffolder = DependencyInjectionScaffolder()

    def test_interfaces_are_mocked(self):
        """Test the two-interface constructor of TestClass2."""
        source = SourceClass(
            name="TestClass2",
            constructors=[
                make_constructor([("IEnumerable", "param1")]),
                make_constructor([("IEnumerable", "param1"), ("ICollection", "param2")]),
            ],
        )

        scaffold = self.scaffolder.scaffold(source)

        assert [(f.name, f.type) for f in scaffold.fields] == [
            ("_param1", TypeRef.mock_of("IEnumerable")),
            ("_param2", TypeRef.mock_of("ICollection")),
            ("_testClass2", TypeRef.plain("TestClass2")),
        ]
        assert scaffold.constructor.name == "TestClass2Tests"
        assert scaffold.sut_field == "_testClass2"
        assert render_body(scaffold.constructor) == [
            "_param1 = new Mock<IEnumerable>();",
            "_param2 = new Mock<ICollection>();",
            "_testClass2 = new TestClass2(_param1.Object, _param2.Object);",
        ]

    def test_concrete_dependencies_are_constructed(self):
        source = SourceClass(
            name="OrderService",
            constructors=[make_constructor([("IOrderRepository", "repository"), ("Clock", "clock")])],
        )

        scaffold = self.scaffolder.scaffold(source)

        assert scaffold.fields[1].type == TypeRef.plain("Clock")
        assert render_body(scaffold.constructor) == [
            "_repository = new Mock<IOrderRepository>();",
            "_clock = new Clock();",
            "_orderService = new OrderService(_repository.Object, _clock);",
        ]

    def test_verbatim_parameter_names_lose_the_at_sign(self):
        """Test that ``@event`` maps to a ``_event`` field."""
        source = SourceClass(name="Ev", constructors=[make_constructor([("IBus", "@event")])])

        scaffold = self.scaffolder.scaffold(source)

        assert [f.name for f in scaffold.fields] == ["_event", "_ev"]
        assert render_body(scaffold.constructor) == [
            "_event = new Mock<IBus>();",
            "_ev = new Ev(_event.Object);",
        ]

    def test_no_constructor_yields_only_sut(self):
        scaffold = self.scaffolder.scaffold(SourceClass(name="Foo"))

        assert [f.name for f in scaffold.fields] == ["_foo"]
        assert render_body(scaffold.constructor) == ["_foo = new Foo();"]
