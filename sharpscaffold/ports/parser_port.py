from abc import abstractmethod
from typing import Protocol

from ..domain.models import SourceFile


class ParserPort(Protocol):
    """Port interface for turning source text into a structural model."""

    @abstractmethod
    def parse(self, text: str, path: str | None = None) -> SourceFile:
        """
        Parse source text into a SourceFile.

        Args:
            text: Full source text
            path: Optional originating path, used for error messages

        Raises:
            ParseError: If the text is not syntactically valid
        """
        ...

    @abstractmethod
    def first_class_name(self, text: str) -> str:
        """
        Return the name of the first class declared in ``text``.

        Raises:
            ParseError: If the text is invalid or declares no class
        """
        ...
