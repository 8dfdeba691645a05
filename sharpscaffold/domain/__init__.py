"""Domain models and errors for sharpscaffold."""

from .models import (
    FileReadError,
    GenerationReport,
    ParseError,
    PipelineError,
    RenderError,
    ScaffoldError,
    SourceClass,
    SourceFile,
    SynthesizedUnit,
    WriteError,
)

__all__ = [
    "ScaffoldError",
    "FileReadError",
    "ParseError",
    "RenderError",
    "WriteError",
    "PipelineError",
    "SourceFile",
    "SourceClass",
    "SynthesizedUnit",
    "GenerationReport",
]
