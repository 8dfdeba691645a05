"""
Rendering adapters for sharpscaffold.

This package contains the C# renderer for synthesized test units.
"""

from .csharp_renderer import CSharpRenderer

__all__ = ["CSharpRenderer"]
