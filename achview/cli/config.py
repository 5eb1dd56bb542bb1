"""Configuration file loading and validation.

This module handles loading configuration from JSON and YAML files, merging
CLI arguments with file-based configuration (with CLI taking precedence), and
validating that referenced writers and settings exist.

Configuration files can specify:
- format: Document output format (json, yaml)
- writer: Entry writer name (csv, parquet, json)
- writer_config: Dictionary of writer-specific options
- strict: Treat unrecognized record codes as fatal
- log_level: Logging level (debug, info, warning, error)
- log_file: Path of a log file
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from achview.cli.registry import get_document_format, get_entry_writer

LOG_LEVELS = ("debug", "info", "warning", "error")


class ConfigError(Exception):
    """Configuration file error.

    Raised when configuration files cannot be loaded, parsed, or validated.
    """


def load_config(path: Path) -> dict[str, Any]:
    """Load configuration from a JSON or YAML file.

    The format is chosen by extension (.json, .yaml, .yml); other extensions
    are tried as JSON first, then YAML.

    Args:
        path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        ConfigError: If the file is missing, unparsable, or not a mapping

    Example:
        >>> config = load_config(Path("achview.yaml"))
        >>> config["writer"]
        'parquet'
    """
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        content = path.read_text()
        if path.suffix == ".json":
            data = json.loads(content)
        elif path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            try:
                data = json.loads(content)
            except json.JSONDecodeError:
                data = yaml.safe_load(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {path} must be a mapping")
    return data


def merge_config(base: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    """Merge CLI arguments into base configuration.

    Only non-None override values are applied, so config file values are
    used when the corresponding CLI argument is not given.

    Example:
        >>> merge_config({"format": "json", "strict": True}, format="yaml")
        {'format': 'yaml', 'strict': True}
    """
    merged = base.copy()
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def validate_config(config: dict[str, Any]) -> list[str]:
    """Validate configuration values.

    Checks that:
    - Referenced document format exists in the registry
    - Referenced entry writer exists in the registry
    - ``strict`` is a boolean
    - ``log_level`` is a known level

    Returns:
        List of validation error messages (empty list if valid)
    """
    errors = []

    if "format" in config:
        try:
            get_document_format(config["format"])
        except KeyError as e:
            errors.append(e.args[0])

    if "writer" in config:
        try:
            get_entry_writer(config["writer"])
        except KeyError as e:
            errors.append(e.args[0])

    if "strict" in config and not isinstance(config["strict"], bool):
        errors.append(f"Option 'strict' must be true or false, got {config['strict']!r}")

    if "log_level" in config and str(config["log_level"]).lower() not in LOG_LEVELS:
        errors.append(
            f"Unknown log level '{config['log_level']}'. Available: {', '.join(LOG_LEVELS)}"
        )

    if "writer_config" in config and not isinstance(config["writer_config"], dict):
        errors.append("Option 'writer_config' must be a mapping")

    return errors


def configure_logging(level: str = "warning", log_file: Path | None = None) -> None:
    """Configure process-wide logging for a CLI run.

    Args:
        level: Level name (debug, info, warning, error)
        log_file: Optional file receiving log records in addition to stderr
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )
