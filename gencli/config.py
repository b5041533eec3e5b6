"""Configuration management for gencli with multi-source loading."""

import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "GENCLI_CONFIG_DIR"
ENV_PREFIX = "GENCLI_"


class LogLevel(str, Enum):
    """Available logging levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def default_config_dir() -> Path:
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".gencli"


class GenSettings(BaseModel):
    """Runtime settings with validation and multi-source loading."""

    config_dir: Optional[Path] = Field(
        default=None,
        validate_default=True,
        description="Directory holding config.json and cache.json",
    )

    # Provider Configuration
    provider_timeout: Optional[float] = Field(
        default=None,
        description="Override the per-tool generation timeout in seconds",
    )
    cache_enabled: bool = Field(
        default=True, description="Persist generated commands between runs"
    )

    # Output Configuration
    show_debug: bool = Field(default=False, description="Show debug information")
    rich_output: bool = Field(default=True, description="Enable rich text formatting")
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")

    @field_validator("config_dir", mode="before")
    @classmethod
    def set_default_config_dir(cls, v):
        """Set default config directory if not provided."""
        if v is None:
            return default_config_dir()
        return Path(v).expanduser() if isinstance(v, str) else v

    @field_validator("provider_timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError("provider_timeout must be positive")
        return v

    @property
    def config_path(self) -> Path:
        return self.config_dir / "config.json"

    @property
    def cache_path(self) -> Path:
        return self.config_dir / "cache.json"

    @property
    def settings_path(self) -> Path:
        return self.config_dir / "settings.toml"


def get_settings_paths() -> List[Path]:
    """Get settings file paths in priority order."""
    paths = [default_config_dir() / "settings.toml"]

    if os.name == "posix":  # Unix/Linux/macOS
        paths.append(Path("/etc/gencli/settings.toml"))
    elif os.name == "nt":  # Windows
        paths.append(
            Path(os.environ.get("ProgramData", "C:/ProgramData"))
            / "gencli"
            / "settings.toml"
        )

    return paths


def load_settings_file(settings_path: Path) -> Dict[str, Any]:
    """Load settings from a TOML file."""
    try:
        if settings_path.exists():
            with open(settings_path, "r", encoding="utf-8") as f:
                return toml.load(f)
    except (OSError, toml.TomlDecodeError) as e:
        # Unreadable settings files fall back to defaults
        logger.warning("Ignoring settings file %s: %s", settings_path, e)
    return {}


def load_environment_variables() -> Dict[str, Any]:
    """Load settings from GENCLI_* environment variables."""
    settings = {}

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        settings_key = key[len(ENV_PREFIX) :].lower()

        if value.lower() in ("true", "1", "yes", "on"):
            settings[settings_key] = True
        elif value.lower() in ("false", "0", "no", "off"):
            settings[settings_key] = False
        else:
            try:
                settings[settings_key] = int(value)
            except ValueError:
                settings[settings_key] = value

    return settings


def load_settings(
    settings_file: Optional[str] = None,
    debug: bool = False,
) -> GenSettings:
    """Load settings from multiple sources with priority handling.

    Priority order (highest to lowest):
    1. Function parameters (settings_file, debug)
    2. Environment variables (GENCLI_*)
    3. User settings file (~/.gencli/settings.toml)
    4. System settings file (/etc/gencli/settings.toml)
    5. Default values
    """
    merged: Dict[str, Any] = {}

    settings_paths = get_settings_paths()
    if settings_file:
        settings_paths.insert(0, Path(settings_file))

    for path in reversed(settings_paths):  # Reverse to maintain priority
        merged.update(load_settings_file(path))

    merged.update(load_environment_variables())

    if debug:
        merged["show_debug"] = True
        merged["log_level"] = LogLevel.DEBUG

    known = {k: v for k, v in merged.items() if k in GenSettings.model_fields}

    try:
        return GenSettings(**known)
    except ValueError as e:
        logger.warning("Invalid settings, using defaults: %s", e)
        if debug:
            return GenSettings(show_debug=True, log_level=LogLevel.DEBUG)
        return GenSettings()


class ConfigurationError(Exception):
    """Configuration-related errors."""

    pass


class ConfigStore:
    """Persisted user preferences: the sticky provider choice.

    Stored as JSON ``{"provider": <name or null>, "providers": {}}``; a null
    provider means auto-detect.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else default_config_dir() / "config.json"
        self.data = self.load()

    @staticmethod
    def defaults() -> Dict[str, Any]:
        return {"provider": None, "providers": {}}

    def load(self) -> Dict[str, Any]:
        try:
            if self.path.exists():
                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    merged = self.defaults()
                    merged.update(data)
                    return merged
                logger.warning("Config file %s is not a JSON object, using defaults", self.path)
        except (OSError, ValueError):
            logger.warning("Could not load config file %s, using defaults", self.path)
        return self.defaults()

    def save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Could not save config: {e}") from e

    def get_provider(self) -> Optional[str]:
        return self.data.get("provider")

    def set_provider(self, provider: Optional[str]) -> None:
        """Persist the sticky provider; None restores auto-detect."""
        self.data["provider"] = provider
        self.save()
