"""Execution configuration for browser scenarios.

Values come from, in increasing precedence: defaults, an optional YAML
file, ``BROWSER_SCENARIOS_*`` environment variables, CLI options.
"""

import dataclasses
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import ConfigError

ENV_PREFIX = "BROWSER_SCENARIOS_"
DEFAULT_CONFIG_FILE = "browser-scenarios.yaml"
VALID_BROWSERS = {"chromium", "firefox", "webkit"}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class ExecutionConfig:
    """Configuration for scenario execution. Timeouts are in seconds."""
    browser: str = "chromium"
    headless: bool = True
    navigation_timeout: float = 30.0
    action_timeout: float = 10.0
    assertion_timeout: float = 5.0
    poll_interval: float = 0.1
    strict_selectors: bool = True
    workers: int = 1
    save_report: bool = False
    report_dir: Optional[Path] = None
    screenshot_dir: Optional[Path] = None

    def __post_init__(self):
        self.browser = str(self.browser).lower()
        if self.report_dir is not None:
            self.report_dir = Path(self.report_dir)
        if self.screenshot_dir is not None:
            self.screenshot_dir = Path(self.screenshot_dir)

    def validate(self) -> "ExecutionConfig":
        """Raise ConfigError if any value is out of range."""
        if self.browser not in VALID_BROWSERS:
            raise ConfigError(
                f"Invalid browser '{self.browser}'. Must be one of: {', '.join(sorted(VALID_BROWSERS))}"
            )
        for name in ("navigation_timeout", "action_timeout", "assertion_timeout", "poll_interval"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)}.")
        if self.workers < 1:
            raise ConfigError(f"workers must be at least 1, got {self.workers}.")
        return self

    def replace(self, **changes: Any) -> "ExecutionConfig":
        """Copy with the given fields changed; None values are ignored."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return dataclasses.replace(self, **changes).validate()


def load_config(
    config_path: Optional[Path] = None,
    environ: Optional[dict[str, str]] = None,
) -> ExecutionConfig:
    """Load execution configuration from a YAML file and the environment.

    Args:
        config_path: YAML file with config fields. Defaults to
            ./browser-scenarios.yaml when that file exists.
        environ: Environment mapping (defaults to os.environ).

    Returns:
        Validated ExecutionConfig.

    Raises:
        FileNotFoundError: If an explicit config_path doesn't exist.
        ConfigError: If the file or any value is invalid.
    """
    environ = os.environ if environ is None else environ
    values: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        values.update(_read_config_file(config_path))
    elif Path(DEFAULT_CONFIG_FILE).exists():
        values.update(_read_config_file(Path(DEFAULT_CONFIG_FILE)))

    fields = {f.name: f for f in dataclasses.fields(ExecutionConfig)}
    for name in fields:
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is not None and raw.strip():
            values[name] = raw.strip()

    unknown = set(values) - set(fields)
    if unknown:
        raise ConfigError(f"Unknown config fields: {', '.join(sorted(unknown))}")

    converted = {
        name: _coerce(name, value, fields[name].default)
        for name, value in values.items()
    }
    return ExecutionConfig(**converted).validate()


def _read_config_file(path: Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping: {path}")
    return data


def _coerce(name: str, value: Any, default: Any) -> Any:
    """Convert a raw file/env value to the type of the field's default."""
    if value is None:
        return None
    try:
        if isinstance(default, bool):
            if isinstance(value, bool):
                return value
            text = str(value).strip().lower()
            if text in _TRUE:
                return True
            if text in _FALSE:
                return False
            raise ValueError(f"expected a boolean, got {value!r}")
        if isinstance(default, int):
            return int(value)
        if isinstance(default, float):
            return float(value)
        if name.endswith("_dir"):
            return Path(value)
        return str(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for '{name}': {e}") from e
