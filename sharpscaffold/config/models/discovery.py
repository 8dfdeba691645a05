"""Input discovery configuration models."""

from pydantic import BaseModel, Field


class DiscoveryConfig(BaseModel):
    """Patterns used when a directory is passed instead of a file."""

    patterns: list[str] = Field(
        default_factory=lambda: ["**/*.cs"],
        description="Glob patterns matched below each directory argument",
    )
    exclude_dirs: list[str] = Field(
        default_factory=lambda: ["bin", "obj", ".git", ".vs", "node_modules"],
        description="Directory names skipped while scanning",
    )
