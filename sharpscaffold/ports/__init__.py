"""
Port interfaces for the sharpscaffold system.

This module contains the interface definitions using Python Protocols
to define contracts between the application layer and adapters.
"""

from .parser_port import ParserPort
from .renderer_port import RendererPort
from .writer_port import WriterPort

__all__ = [
    "ParserPort",
    "RendererPort",
    "WriterPort",
]
