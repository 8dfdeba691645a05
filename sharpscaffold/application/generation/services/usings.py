"""
Using-directive merging for generated test units.

The generated unit always needs the test and mocking framework namespaces
plus a reference back to the class under test, while every directive the
original file already had must survive without duplication.
"""

from collections.abc import Iterable

from ....domain.models import UsingDirective

DEFAULT_TEST_USINGS: tuple[str, ...] = (
    "System",
    "System.Collections",
    "System.Collections.Generic",
    "Xunit",
    "Moq",
)


class UsingDirectiveSet:
    """Insertion-ordered directives keyed by qualified name; first write wins."""

    def __init__(self) -> None:
        self._directives: dict[str, UsingDirective] = {}

    def add(self, directive: UsingDirective) -> bool:
        """Add ``directive`` unless its name is already present. Returns True if added."""
        if directive.name in self._directives:
            return False
        self._directives[directive.name] = directive
        return True

    def __contains__(self, name: object) -> bool:
        return name in self._directives

    def __len__(self) -> int:
        return len(self._directives)

    def to_list(self) -> list[UsingDirective]:
        return list(self._directives.values())


def merge_usings(
    namespace: str | None, original: Iterable[UsingDirective]
) -> list[UsingDirective]:
    """
    Build the ordered, deduplicated directive list for a generated unit.

    Priority order: the self-referencing namespace (if any), the default test
    directives, then the file's own directives in their original order.

    Args:
        namespace: Namespace of the class under test, or None
        original: Using directives declared in the source file

    Returns:
        Directives in insertion order with unique qualified names
    """
    merged = UsingDirectiveSet()

    if namespace:
        merged.add(UsingDirective(name=namespace))

    for name in DEFAULT_TEST_USINGS:
        merged.add(UsingDirective(name=name))

    for directive in original:
        merged.add(directive)

    return merged.to_list()
