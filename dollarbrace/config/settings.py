"""
settings.py

This module provides configuration management for dollarbrace.

Features:
- Centralized library configuration using Pydantic settings
- Location of the per-user defaults file
- Loading of JSON property files, including the defaults file

Usage:
Import appsettings for configuration values.
"""

import json
from pathlib import Path
from typing import Final
from appdirs import user_config_dir
from pydantic_settings import BaseSettings, SettingsConfigDict
from dollarbrace.lib.errors import FilterIOError
from dollarbrace.lib.log import LOG

# Set up the configuration directory and file using appdirs
CONFIG_DIR: Final[Path] = Path(user_config_dir("dollarbrace", ""))
DEFAULTS_FILE: Final[Path] = CONFIG_DIR / "defaults.json"


class App(BaseSettings):
    """
    Library settings model.

    Settings can be overridden through environment variables with DBR_ prefix.

    Attributes:
        beQuiet: Suppress debug logging output
        encoding: Text encoding used when filtering files
        expressionPrefix: Prefix that addresses the expression resolver
        strictOneOf: Abort a oneof evaluation on circular resolution
    """

    beQuiet: bool = True
    encoding: str = "utf-8"
    expressionPrefix: str = "py:"
    strictOneOf: bool = True

    model_config = SettingsConfigDict(
        env_prefix="DBR_",  # Environment variables with this prefix override settings
        case_sensitive=False,  # Allow case-insensitive environment variables
        extra="allow",  # Allow additional attributes not defined in the model
    )


def properties_load(path: Path = DEFAULTS_FILE, missing_ok: bool = True) -> dict[str, str]:
    """
    Load a JSON property file.

    The file is a flat JSON object mapping property names to string values.
    By default a missing file is not an error and yields an empty table, which
    is how the per-user defaults file is treated.

    Args:
        path: Location of the property file
        missing_ok: Return an empty table instead of failing on a missing file

    Returns:
        dict[str, str]: The property table

    Raises:
        FilterIOError: If the file cannot be read
        ValueError: If the file is not a JSON object of strings
    """
    if missing_ok and not path.exists():
        return {}

    try:
        content: str = path.read_text(encoding=appsettings.encoding)
    except (OSError, UnicodeError) as e:
        raise FilterIOError(path, str(e)) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict) or not all(
        isinstance(value, str) for value in data.values()
    ):
        raise ValueError(f"{path} must contain a JSON object of strings")

    LOG(f"Loaded {len(data)} properties from {path}")
    return data


# Create the settings instance
appsettings: Final[App] = App()
