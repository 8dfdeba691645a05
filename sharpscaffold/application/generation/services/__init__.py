"""Synthesis services: naming, usings, dependency scaffolding and statements."""

from .dependency_injection import DependencyInjectionScaffolder, is_mockable_interface
from .name_resolver import UniqueNameResolver
from .statements import StatementSynthesizer, classify_method
from .unit_synthesizer import TestUnitSynthesizer
from .usings import DEFAULT_TEST_USINGS, UsingDirectiveSet, merge_usings

__all__ = [
    "DependencyInjectionScaffolder",
    "is_mockable_interface",
    "UniqueNameResolver",
    "StatementSynthesizer",
    "classify_method",
    "TestUnitSynthesizer",
    "DEFAULT_TEST_USINGS",
    "UsingDirectiveSet",
    "merge_usings",
]
