"""Application layer: the generation use case and its synthesis services."""

from .generate_usecase import TestsGenerator

__all__ = ["TestsGenerator"]
