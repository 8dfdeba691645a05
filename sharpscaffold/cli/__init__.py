"""Command line interface for sharpscaffold."""

from .main import app, main

__all__ = ["app", "main"]
