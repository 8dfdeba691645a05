"""Logging configuration models."""

from pydantic import BaseModel, Field


class LoggingConfig(BaseModel):
    """Configuration for logging behavior."""

    suppress_modules: list[str] = Field(
        default=["asyncio"],
        description="External library modules to suppress debug logs from in non-verbose mode",
    )
