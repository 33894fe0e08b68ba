"""
Harness Settings

Typed, validated settings for a test run, resolved in this order (later wins):
    1. built-in defaults
    2. YAML file (stf.yaml in the working directory, or an explicit path)
    3. environment variables (STF_*)
    4. command line overrides

Usage:
    from stf.settings import load_settings

    settings = load_settings(config_file="ci/stf.yaml")
    settings.result_column  # 60

YAML layout (either form):
    stf:
      color: never
      result_column: 72

    color: never
    result_column: 72
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "stf.yaml"


@dataclass
class Setting:
    """Definition of one setting with validation."""

    key: str
    env: str
    default: Any = None
    var_type: str = "str"  # str, int, bool, path
    choices: Optional[List[Any]] = None
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    case: Optional[str] = None  # "upper" or "lower", applied to str values
    description: str = ""

    def parse(self, value: Any) -> Any:
        """Convert a raw value (string from env/CLI, or YAML scalar) to the target type."""
        if value is None:
            return None

        if self.var_type == "int":
            if isinstance(value, bool):
                raise ConfigError(f"{self.key}: '{value}' is not a valid integer")
            try:
                return int(value)
            except (TypeError, ValueError):
                raise ConfigError(f"{self.key}: '{value}' is not a valid integer")
        elif self.var_type == "bool":
            if isinstance(value, bool):
                return value
            return str(value).lower() in ("true", "1", "yes", "on")
        elif self.var_type == "path":
            return Path(str(value)).expanduser()
        elif self.var_type == "str":
            value = str(value)
            if self.case == "upper":
                return value.upper()
            if self.case == "lower":
                return value.lower()
            return value
        return value

    def validate(self, value: Any) -> Any:
        """Returns value if valid, raises ConfigError otherwise."""
        if value is None:
            return value

        if self.var_type == "int":
            if self.min_value is not None and value < self.min_value:
                raise ConfigError(f"{self.key}: value {value} is below minimum {self.min_value}")
            if self.max_value is not None and value > self.max_value:
                raise ConfigError(f"{self.key}: value {value} exceeds maximum {self.max_value}")

        if self.choices is not None and value not in self.choices:
            raise ConfigError(
                f"{self.key}: '{value}' is not a valid choice. Must be one of: {self.choices}"
            )
        return value

    def resolve(self, value: Any) -> Any:
        return self.validate(self.parse(value))


SETTINGS: Dict[str, Setting] = {
    "log_file": Setting(
        key="log_file",
        env="STF_LOG_FILE",
        var_type="path",
        description="Report destination (stderr when unset or not writable)",
    ),
    "color": Setting(
        key="color",
        env="STF_COLOR",
        default="auto",
        choices=["auto", "always", "never"],
        case="lower",
        description="ANSI colors in the report",
    ),
    "result_column": Setting(
        key="result_column",
        env="STF_RESULT_COLUMN",
        default=60,
        var_type="int",
        min_value=20,
        max_value=200,
        description="Column where [PASSED]/[FAILED] markers start",
    ),
    "log_level": Setting(
        key="log_level",
        env="STF_LOG_LEVEL",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        case="upper",
        description="Level of the harness's own logging on stderr",
    ),
}


@dataclass
class HarnessSettings:
    """Resolved settings for one run."""

    log_file: Optional[Path] = None
    color: str = "auto"
    result_column: int = 60
    log_level: str = "WARNING"

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def load_yaml_settings(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read settings from a YAML file.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, is not a
            mapping, or names unknown settings
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}")

    if data is None:
        return {}
    if isinstance(data, dict) and isinstance(data.get("stf"), dict):
        data = data["stf"]
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    unknown = sorted(set(data) - set(SETTINGS))
    if unknown:
        raise ConfigError(f"Unknown settings in {path}: {', '.join(unknown)}")

    logger.debug(f"Loaded settings from {path}: {sorted(data)}")
    return data


def load_settings(
    config_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> HarnessSettings:
    """
    Resolve settings from defaults, YAML, environment and overrides.

    Args:
        config_file: YAML file to read. Must exist when given. When None,
            stf.yaml in the working directory is used if present.
        environ: Environment mapping, os.environ by default
        overrides: Values from the command line; None values are ignored

    Returns:
        Validated HarnessSettings

    Raises:
        ConfigError: If any value is invalid
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {key: setting.default for key, setting in SETTINGS.items()}

    if config_file is not None:
        values.update(load_yaml_settings(config_file))
    elif Path(DEFAULT_CONFIG_FILE).is_file():
        values.update(load_yaml_settings(DEFAULT_CONFIG_FILE))

    for key, setting in SETTINGS.items():
        raw = environ.get(setting.env)
        if raw is not None and raw != "":
            values[key] = raw

    for key, value in (overrides or {}).items():
        if key not in SETTINGS:
            raise ConfigError(f"Unknown setting: {key}")
        if value is not None:
            values[key] = value

    resolved = {key: SETTINGS[key].resolve(value) for key, value in values.items()}
    return HarnessSettings(**resolved)
