"""
Parsing adapters for sharpscaffold.

This package contains the tree-sitter based C# parser.
"""

from .csharp_parser import CSharpParser

__all__ = ["CSharpParser"]
