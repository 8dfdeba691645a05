"""
File store adapter implementing the WriterPort interface.

Reads C# sources as UTF-8 text and persists generated units. All methods are
blocking; the pipeline runs them on its thread pool.
"""

import logging
import os
import tempfile
from pathlib import Path

from ...domain.models import FileReadError, WriteError

logger = logging.getLogger(__name__)


class SourceFileStore:
    """
    Filesystem-backed reader/writer for sources and generated units.

    Writes go through a temporary file in the target directory followed by an
    atomic replace, so a reader never observes a half-written unit.
    """

    def __init__(self, dry_run: bool = False, encoding: str = "utf-8") -> None:
        """
        Initialize the file store.

        Args:
            dry_run: If True, report writes without touching the filesystem
            encoding: Text encoding for reads and writes
        """
        self.dry_run = dry_run
        self.encoding = encoding

    def read_text(self, path: str | Path) -> str:
        file_path = Path(path)
        try:
            return file_path.read_text(encoding=self.encoding)
        except FileNotFoundError as e:
            raise FileReadError(f"File does not exist: {file_path}", path=str(file_path)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(f"Failed to read {file_path}: {e}", path=str(file_path)) from e

    def ensure_directory(self, directory: str | Path) -> Path:
        dir_path = Path(directory)
        if self.dry_run:
            logger.debug("[dry-run] Would ensure directory %s", dir_path)
            return dir_path
        try:
            dir_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteError(
                f"Failed to create output directory {dir_path}: {e}", path=str(dir_path)
            ) from e
        return dir_path

    def write_text(self, path: str | Path, content: str) -> Path:
        file_path = Path(path)
        if self.dry_run:
            logger.info("[dry-run] Would write %s (%d chars)", file_path, len(content))
            return file_path

        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding=self.encoding,
                newline="",
                dir=file_path.parent,
                prefix=f".{file_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(content)
            os.replace(tmp_name, file_path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise WriteError(f"Failed to write {file_path}: {e}", path=str(file_path)) from e

        logger.debug("Wrote %s", file_path)
        return file_path
