from abc import abstractmethod
from pathlib import Path
from typing import Protocol


class WriterPort(Protocol):
    """Port interface for reading sources and persisting generated units."""

    @abstractmethod
    def read_text(self, path: str | Path) -> str:
        """
        Read a source file as UTF-8 text.

        Raises:
            FileReadError: If the path is missing or unreadable
        """
        ...

    @abstractmethod
    def ensure_directory(self, directory: str | Path) -> Path:
        """Create ``directory`` if absent; calling it twice is harmless."""
        ...

    @abstractmethod
    def write_text(self, path: str | Path, content: str) -> Path:
        """
        Write ``content`` to ``path``, replacing any existing file.

        Raises:
            WriteError: If the file cannot be written
        """
        ...
