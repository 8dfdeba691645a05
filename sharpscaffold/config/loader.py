"""Configuration loader for sharpscaffold."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
import yaml
from pydantic import ValidationError

from .models import SharpScaffoldConfig

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


SAMPLE_YAML_CONFIG = """# sharpscaffold configuration
# Uncomment and modify the sections you want to customize.

# =============================================================================
# PIPELINE PARALLELISM
# =============================================================================

pipeline:
  max_files_reading_parallel: 3            # Concurrent file reads
  max_test_classes_generating_parallel: 3  # Concurrent parse/synthesize/render workers
  max_files_writing_parallel: 6            # Concurrent file writes

# =============================================================================
# OUTPUT
# =============================================================================

output:
  save_path: './tests'          # Directory receiving generated test classes
  file_extension: '.cs'         # Extension of generated files
  collision_policy: 'overwrite' # Options: 'overwrite', 'error'
  newline: 'lf'                 # Options: 'lf', 'crlf'

# =============================================================================
# INPUT DISCOVERY
# =============================================================================

discovery:
  # Patterns matched below directories given on the command line
  patterns:
    - '**/*.cs'
  exclude_dirs:
    - 'bin'
    - 'obj'
    - '.git'
    - '.vs'
    - 'node_modules'

# =============================================================================
# LOGGING
# =============================================================================

logging:
  suppress_modules:
    - 'asyncio'

# =============================================================================
# ENVIRONMENT VARIABLE OVERRIDES
# =============================================================================
#
# Any value can be overridden with an environment variable prefixed with
# SHARPSCAFFOLD_. Use double underscores (__) to separate nested keys.
#
# Examples:
#   SHARPSCAFFOLD_PIPELINE__MAX_FILES_WRITING_PARALLEL=12
#   SHARPSCAFFOLD_OUTPUT__COLLISION_POLICY=error
#
# =============================================================================
"""


class ConfigLoader:
    """Layers a config file, ``SHARPSCAFFOLD_*`` variables and CLI options into one config."""

    SEARCH_PATHS = (
        ".sharpscaffold.toml",
        ".sharpscaffold.yml",
        ".sharpscaffold.yaml",
        "sharpscaffold.toml",
        "sharpscaffold.yml",
        "sharpscaffold.yaml",
    )

    ENV_PREFIX = "SHARPSCAFFOLD_"

    # Variables under the prefix that are not configuration keys
    RESERVED_ENV_KEYS = frozenset({"QUIET"})

    def __init__(self, config_file: str | Path | None = None):
        self.config_file = Path(config_file) if config_file else None

    def load_config(self, cli_overrides: dict[str, Any] | None = None) -> SharpScaffoldConfig:
        """Build the configuration; later layers win: file, environment, CLI.

        ``None`` values in ``cli_overrides`` stand for options the user did
        not pass and leave lower layers untouched.

        Raises:
            ConfigurationError: If a source cannot be read or the merged
                values fail validation
        """
        layers = [self._read_file(), self._read_environment(), _without_none(cli_overrides or {})]

        merged: dict[str, Any] = {}
        for layer in layers:
            merged = _merge(merged, layer)

        try:
            return SharpScaffoldConfig(**merged)
        except ValidationError as e:
            message = f"Configuration validation failed: {e}"
            logger.error(message)
            raise ConfigurationError(message) from e

    def create_sample_config(self, filepath: str | Path | None = None) -> Path:
        """Write a starter config file and return its path.

        A ``.toml`` target receives the defaults as TOML; any other name gets
        the commented YAML sample.
        """
        target = Path(filepath) if filepath is not None else Path(".sharpscaffold.yml")

        try:
            if target.suffix.lower() == ".toml":
                with open(target, "wb") as f:
                    tomli_w.dump(SharpScaffoldConfig().model_dump(mode="json"), f)
            else:
                target.write_text(SAMPLE_YAML_CONFIG, encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to write {target}: {e}") from e

        logger.info("Sample configuration created at %s", target)
        return target

    def _locate_file(self) -> Path | None:
        if self.config_file is not None:
            if not self.config_file.exists():
                raise ConfigurationError(f"Configuration file not found: {self.config_file}")
            return self.config_file
        return next((Path(name) for name in self.SEARCH_PATHS if Path(name).exists()), None)

    def _read_file(self) -> dict[str, Any]:
        path = self._locate_file()
        if path is None:
            logger.debug("No configuration file found, using defaults")
            return {}

        suffix = path.suffix.lower()
        try:
            if suffix == ".toml":
                with open(path, "rb") as f:
                    content = tomllib.load(f)
            elif suffix in (".yml", ".yaml"):
                with open(path, encoding="utf-8") as f:
                    content = yaml.safe_load(f)
            else:
                raise ConfigurationError(f"Unknown configuration file type: {path}")
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read {path}: {e}") from e

        if not content:
            logger.warning("Configuration file %s is empty", path)
            return {}
        if not isinstance(content, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a mapping")

        logger.debug("Loaded configuration from %s", path)
        return content

    def _read_environment(self) -> dict[str, Any]:
        """Collect ``SHARPSCAFFOLD_SECTION__KEY=value`` variables as nested keys."""
        values: dict[str, Any] = {}
        for name, raw in os.environ.items():
            if not name.startswith(self.ENV_PREFIX):
                continue
            key = name[len(self.ENV_PREFIX) :]
            if key in self.RESERVED_ENV_KEYS:
                continue

            *sections, leaf = key.lower().split("__")
            node = values
            for section in sections:
                node = node.setdefault(section, {})
            node[leaf] = _coerce(raw)
        return values


def _coerce(raw: str) -> Any:
    """Interpret an environment string as bool, number, comma list or plain text."""
    lowered = raw.lower()
    if lowered in ("true", "yes", "on"):
        return True
    if lowered in ("false", "no", "off"):
        return False
    try:
        return float(raw) if "." in raw else int(raw)
    except ValueError:
        pass
    if "," in raw:
        return [item.strip() for item in raw.split(",")]
    return raw


def _merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def _without_none(values: dict[str, Any]) -> dict[str, Any]:
    return {
        key: _without_none(value) if isinstance(value, dict) else value
        for key, value in values.items()
        if value is not None
    }
