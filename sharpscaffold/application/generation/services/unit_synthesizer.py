"""
Test unit synthesis.

Turns one parsed class into one renderable SynthesizedUnit by combining
using-directive merging, dependency injection scaffolding and per-method
statement synthesis.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from ....domain.models import SourceClass, SourceFile, SynthesizedUnit
from .dependency_injection import DependencyInjectionScaffolder
from .name_resolver import UniqueNameResolver
from .statements import StatementSynthesizer
from .usings import merge_usings

logger = logging.getLogger(__name__)

TESTS_SUFFIX = "Tests"


def generated_namespace(namespace: str | None) -> str:
    """``N`` -> ``N.Tests``; no namespace -> ``Tests``."""
    return f"{namespace}.{TESTS_SUFFIX}" if namespace else TESTS_SUFFIX


def generated_class_name(class_name: str) -> str:
    return f"{class_name}{TESTS_SUFFIX}"


class TestUnitSynthesizer:
    """Builds a SynthesizedUnit for each class of a parsed file."""

    __test__ = False  # not a pytest test class

    def __init__(self, scaffolder: DependencyInjectionScaffolder | None = None) -> None:
        self._scaffolder = scaffolder or DependencyInjectionScaffolder(TESTS_SUFFIX)

    def synthesize(self, source_class: SourceClass, source_file: SourceFile) -> SynthesizedUnit:
        """
        Synthesize the test unit for one class.

        Args:
            source_class: Class under test
            source_file: File the class was declared in (supplies usings)

        Returns:
            The assembled unit, ready for rendering
        """
        namespace = source_class.namespace or source_file.namespace
        scaffold = self._scaffolder.scaffold(source_class)

        resolver = UniqueNameResolver()
        statements = StatementSynthesizer(scaffold.sut_field)
        methods = [
            statements.synthesize(method, resolver.resolve(method.name))
            for method in source_class.methods
            if method.is_scaffoldable
        ]

        unit = SynthesizedUnit(
            namespace=generated_namespace(namespace),
            usings=merge_usings(namespace, source_file.usings),
            class_name=generated_class_name(source_class.name),
            fields=scaffold.fields,
            constructor=scaffold.constructor,
            methods=methods,
        )
        logger.debug(
            "Synthesized %s with %d test method(s)", unit.class_name, len(methods)
        )
        return unit

    def synthesize_file(self, source_file: SourceFile) -> Iterator[SynthesizedUnit]:
        """Yield one unit per class, in declaration order."""
        for source_class in source_file.classes:
            yield self.synthesize(source_class, source_file)
