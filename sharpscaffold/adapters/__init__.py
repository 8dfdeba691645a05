"""
Adapters for sharpscaffold.

Concrete implementations of the ports: the tree-sitter C# parser, the C#
renderer and the filesystem store.
"""

from .io.file_store import SourceFileStore
from .parsing.csharp_parser import CSharpParser
from .rendering.csharp_renderer import CSharpRenderer

__all__ = ["CSharpParser", "CSharpRenderer", "SourceFileStore"]
