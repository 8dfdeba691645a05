"""
Input discovery - expands command-line paths into C# source files.

Files are taken as given; directories are searched with the configured glob
patterns, skipping excluded directories. The caller's order is preserved and
duplicates are dropped.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from ...config.models import DiscoveryConfig

logger = logging.getLogger(__name__)


class FileDiscoveryError(Exception):
    """Exception raised when file discovery fails."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class FileDiscoveryService:
    """Service for turning user-supplied paths into an ordered file list."""

    def __init__(self, config: DiscoveryConfig | None = None) -> None:
        self.config = config or DiscoveryConfig()
        self._exclude_dirs = set(self.config.exclude_dirs)

    def discover(self, paths: Iterable[str | Path]) -> list[str]:
        """
        Expand ``paths`` into source files.

        Paths that do not exist are kept as-is so the pipeline reports them
        as read failures.

        Raises:
            FileDiscoveryError: If a directory cannot be listed
        """
        discovered: list[str] = []
        seen: set[str] = set()

        def add(candidate: Path) -> None:
            key = str(candidate)
            if key not in seen:
                seen.add(key)
                discovered.append(key)

        for raw in paths:
            path = Path(raw)
            if not path.is_dir():
                add(path)
                continue
            for found in self._scan_directory(path):
                add(found)

        logger.debug("Discovered %d source file(s)", len(discovered))
        return discovered

    def _scan_directory(self, directory: Path) -> list[Path]:
        matches: set[Path] = set()
        try:
            for pattern in self.config.patterns:
                for candidate in directory.glob(pattern):
                    if candidate.is_file() and not self._is_excluded(candidate, directory):
                        matches.add(candidate)
        except OSError as e:
            raise FileDiscoveryError(f"Failed to scan {directory}: {e}", cause=e) from e
        return sorted(matches)

    def _is_excluded(self, candidate: Path, root: Path) -> bool:
        relative = candidate.relative_to(root)
        return any(part in self._exclude_dirs for part in relative.parts[:-1])
