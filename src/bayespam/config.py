# =============================================================================
# Configuration Management
# =============================================================================
# Handles loading, saving, and validating bayespam configuration.
#
# XDG Base Directory Compliance (https://specifications.freedesktop.org/basedir-spec/):
#   - Config:  $XDG_CONFIG_HOME/bayespam/  (default: ~/.config/bayespam/)
#   - Data:    $XDG_DATA_HOME/bayespam/    (default: ~/.local/share/bayespam/)
#
# Files:
#   - config.toml: User configuration (model location, output, logging)
#   - model.json: Trained model (in data directory, unless configured)
#
# The classifier itself never looks at any of this. The CLI resolves the
# model path here and passes it in.
# =============================================================================

import logging
import os
import tomllib  # Built into Python 3.11+
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w  # For writing TOML (tomllib is read-only)


# =============================================================================
# XDG Directory Management
# =============================================================================

# Application identifier used in all XDG paths
APP_NAME = "bayespam"

# File name of the model inside the data directory
MODEL_FILE_NAME = "model.json"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_xdg_config_home() -> Path:
    """
    Returns the XDG config directory for bayespam.

    Respects $XDG_CONFIG_HOME if set, otherwise uses ~/.config/bayespam/
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        base = Path(xdg_config)
    else:
        base = Path.home() / ".config"
    return base / APP_NAME


def get_xdg_data_home() -> Path:
    """
    Returns the XDG data directory for bayespam.

    Respects $XDG_DATA_HOME if set, otherwise uses ~/.local/share/bayespam/
    This is where the trained model lives.
    """
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        base = Path(xdg_data)
    else:
        base = Path.home() / ".local" / "share"
    return base / APP_NAME


def ensure_directories() -> dict[str, Path]:
    """
    Creates all required XDG directories if they don't exist.

    Returns:
        Dictionary mapping directory type to path.
    """
    dirs = {
        "config": get_xdg_config_home(),
        "data": get_xdg_data_home(),
    }

    for dir_path in dirs.values():
        dir_path.mkdir(parents=True, exist_ok=True)

    return dirs


# =============================================================================
# Configuration Data Structures
# =============================================================================

@dataclass
class ModelConfig:
    """
    Configuration for model storage.

    Attributes:
        path: Model file location. Empty means the XDG data directory.
        pretty: Write indented JSON when saving.
    """
    path: str = ""
    pretty: bool = False


@dataclass
class LoggingConfig:
    """
    Configuration for logging.

    Attributes:
        level: Root log level name ("DEBUG", "INFO", "WARNING", ...).
    """
    level: str = "WARNING"


@dataclass
class Config:
    """
    Main configuration container for bayespam.

    Attributes:
        model: Model storage configuration.
        logging: Logging configuration.

    Usage:
        >>> config = Config.load()
        >>> config.model_path()
        PosixPath('/home/user/.local/share/bayespam/model.json')
    """
    model: ModelConfig = field(default_factory=ModelConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # -------------------------------------------------------------------------
    # File Paths
    # -------------------------------------------------------------------------

    @staticmethod
    def config_file_path() -> Path:
        """Returns the path to the main config file."""
        return get_xdg_config_home() / "config.toml"

    @staticmethod
    def default_model_path() -> Path:
        """Returns the default path to the trained model."""
        return get_xdg_data_home() / MODEL_FILE_NAME

    def model_path(self) -> Path:
        """Returns the configured model path, falling back to the default."""
        if self.model.path:
            return Path(self.model.path).expanduser()
        return self.default_model_path()

    @property
    def log_level(self) -> int:
        """Numeric log level for the logging module."""
        return getattr(logging, self.logging.level)

    # -------------------------------------------------------------------------
    # Loading and Saving
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """
        Load configuration from the config file.

        If the XDG config file doesn't exist, returns default configuration.
        An explicitly given file must exist.

        Args:
            path: Config file to read. Uses the XDG location if None.

        Returns:
            Loaded Config object.

        Raises:
            ConfigError: If the config file is invalid, or if an explicit
                path doesn't exist.
        """
        config_path = path or cls.config_file_path()

        if not config_path.exists():
            if path is not None:
                raise ConfigError(f"Config file not found: {config_path}")
            # No config file yet - return defaults
            return cls()

        # Load and parse the TOML file
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file: {e}") from e
        except OSError as e:
            raise ConfigError(f"Could not read config file: {e}") from e

        return cls._from_dict(data)

    def save(self, path: Path | None = None) -> None:
        """
        Save configuration to the config file.

        Args:
            path: Config file to write. Uses the XDG location if None.
        """
        config_path = path or self.config_file_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "wb") as f:
            tomli_w.dump(self._to_dict(), f)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """
        Create a Config object from a dictionary (parsed TOML).

        Raises:
            ConfigError: If a value has the wrong type or is out of range.
        """
        config = cls()

        # Model settings
        model = data.get("model", {})
        config.model = ModelConfig(
            path=model.get("path", ""),
            pretty=model.get("pretty", False),
        )
        if not isinstance(config.model.path, str):
            raise ConfigError("model.path must be a string")
        if not isinstance(config.model.pretty, bool):
            raise ConfigError("model.pretty must be true or false")

        # Logging settings
        log = data.get("logging", {})
        level = log.get("level", "WARNING")
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ConfigError(
                f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level!r}"
            )
        config.logging = LoggingConfig(level=level.upper())

        return config

    def _to_dict(self) -> dict[str, Any]:
        """
        Convert Config to a dictionary for TOML serialization.
        """
        data: dict[str, Any] = {}

        data["model"] = {
            "path": self.model.path,
            "pretty": self.model.pretty,
        }

        data["logging"] = {
            "level": self.logging.level,
        }

        return data


# =============================================================================
# Exceptions
# =============================================================================

class ConfigError(Exception):
    """Raised when there's an error loading or parsing configuration."""
    pass


# =============================================================================
# Utility Functions
# =============================================================================

def print_paths(config: Config | None = None) -> None:
    """
    Print all paths for debugging.
    Useful for users wondering where their config and model are stored.
    """
    config = config or Config()
    print(f"Config:  {get_xdg_config_home()}")
    print(f"Data:    {get_xdg_data_home()}")
    print()
    print(f"Config file:  {Config.config_file_path()}")
    print(f"Model:        {config.model_path()}")
