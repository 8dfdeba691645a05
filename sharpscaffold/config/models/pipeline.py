"""Pipeline concurrency and output configuration models."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConcurrencyConfig(BaseModel):
    """Maximum number of concurrent workers per pipeline stage."""

    max_files_reading_parallel: int = Field(
        default=3, ge=1, le=256, description="Concurrent file reads"
    )
    max_test_classes_generating_parallel: int = Field(
        default=3, ge=1, le=256, description="Concurrent parse/synthesize/render workers"
    )
    max_files_writing_parallel: int = Field(
        default=6, ge=1, le=256, description="Concurrent file writes"
    )


class OutputConfig(BaseModel):
    """Where and how generated test classes are written."""

    save_path: str = Field(
        default="./tests", description="Directory receiving generated test classes"
    )
    file_extension: str = Field(default=".cs", description="Extension of generated files")
    collision_policy: Literal["overwrite", "error"] = Field(
        default="overwrite",
        description="What to do when two classes map to the same generated file name",
    )
    newline: Literal["lf", "crlf"] = Field(
        default="lf", description="Line endings of generated files"
    )

    @field_validator("file_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Require a leading dot and no path separators."""
        if not v.startswith(".") or "/" in v or "\\" in v:
            raise ValueError("file_extension must look like '.cs'")
        return v


class PipelineConfig(BaseModel):
    """
    Immutable configuration of one generation run.

    Holds the per-stage parallelism limits, the ordered input files and the
    output directory.
    """

    model_config = ConfigDict(frozen=True)

    max_files_reading_parallel: int = Field(..., ge=1)
    max_files_writing_parallel: int = Field(..., ge=1)
    max_test_classes_generating_parallel: int = Field(..., ge=1)
    files_paths: tuple[str, ...] = Field(default_factory=tuple)
    save_path: str = Field(..., min_length=1)
    file_extension: str = ".cs"
    collision_policy: Literal["overwrite", "error"] = "overwrite"
    dry_run: bool = False

    def output_path_for(self, class_name: str) -> Path:
        return Path(self.save_path) / f"{class_name}{self.file_extension}"
