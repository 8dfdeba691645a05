"""Configuration models for sharpscaffold.

This package contains all configuration models organized by concern.
All models are re-exported here.
"""

from .main import SharpScaffoldConfig
from .discovery import DiscoveryConfig
from .pipeline import ConcurrencyConfig, OutputConfig, PipelineConfig
from .logging_config import LoggingConfig

__all__ = [
    "SharpScaffoldConfig",
    "DiscoveryConfig",
    "ConcurrencyConfig",
    "OutputConfig",
    "PipelineConfig",
    "LoggingConfig",
]
