"""
IO adapters for file operations.

This module provides the file store used by the pipeline, input discovery
and the Rich console/logging helpers used by the CLI.
"""

from .file_discovery import FileDiscoveryError, FileDiscoveryService
from .file_store import SourceFileStore
from .rich_cli import SHARPSCAFFOLD_THEME, RichCliComponents

__all__ = [
    "FileDiscoveryError",
    "FileDiscoveryService",
    "SourceFileStore",
    "RichCliComponents",
    "SHARPSCAFFOLD_THEME",
]
