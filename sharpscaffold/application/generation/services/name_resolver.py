"""Collision-free test method naming within one generated class."""


class UniqueNameResolver:
    """
    Hands out ``<base>Test<n>`` names that are unique within one scope.

    Create one resolver per generated class; resolvers are never shared
    between classes or workers.
    """

    SUFFIX = "Test"

    def __init__(self) -> None:
        self._used: list[str] = []

    def resolve(self, base_name: str) -> str:
        """Return the first free ``base_name + "Test" + n`` with n from 0 and record it."""
        counter = 0
        candidate = f"{base_name}{self.SUFFIX}{counter}"
        while candidate in self._used:
            counter += 1
            candidate = f"{base_name}{self.SUFFIX}{counter}"
        self._used.append(candidate)
        return candidate
