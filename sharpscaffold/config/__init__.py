"""Configuration management for sharpscaffold."""

from .loader import ConfigLoader, ConfigurationError
from .models import (
    ConcurrencyConfig,
    DiscoveryConfig,
    LoggingConfig,
    OutputConfig,
    PipelineConfig,
    SharpScaffoldConfig,
)

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "SharpScaffoldConfig",
    "ConcurrencyConfig",
    "DiscoveryConfig",
    "LoggingConfig",
    "OutputConfig",
    "PipelineConfig",
]
