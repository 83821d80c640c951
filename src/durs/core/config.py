"""Configuration system for durs.

Implements the configuration schema using Pydantic for validation, loaded
from an optional YAML file with fail-fast validation and actionable error
messages. Every field has a default, so running without a configuration file
is valid.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Annotated, Final

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

VALID_LOG_LEVELS: Final[frozenset[str]] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR"})

CONFIG_FILE_NAMES: Final[tuple[str, ...]] = ("durs.yaml", "durs.yml")


class SortKey(str, Enum):
    """Row ordering for directory summaries."""

    SIZE = "size"
    NAME = "name"
    NONE = "none"


class BrowserConfig(BaseModel):
    """Configuration for the interactive browser."""

    model_config = ConfigDict(extra="forbid")

    poll_interval: Annotated[
        float,
        Field(
            gt=0,
            description="Seconds to wait for a key press before redrawing",
        ),
    ] = 2.0
    sort_by: Annotated[
        SortKey,
        Field(description="Row ordering: size (largest first), name, or none"),
    ] = SortKey.SIZE
    show_hidden: Annotated[
        bool,
        Field(description="Whether entries starting with a dot are shown"),
    ] = True


class OutputConfig(BaseModel):
    """Configuration for non-interactive output."""

    model_config = ConfigDict(extra="forbid")

    human_readable: Annotated[
        bool,
        Field(description="Show sizes in binary units instead of raw bytes"),
    ] = True


class LoggingConfig(BaseModel):
    """Configuration for application logging."""

    model_config = ConfigDict(extra="forbid")

    level: Annotated[
        str,
        Field(description="Logging level (DEBUG, INFO, WARNING, ERROR)"),
    ] = "WARNING"
    file: Annotated[
        Path | None,
        Field(description="Optional file receiving log records"),
    ] = None

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Upper-case and validate the log level.

        Args:
            v: Raw log level value

        Returns:
            Normalized log level

        Raises:
            ValueError: If the level is not recognised
        """
        if not isinstance(v, str):
            return v
        normalized = v.strip().upper()
        if normalized not in VALID_LOG_LEVELS:
            msg = f"Invalid log level {v!r}, expected one of: {', '.join(sorted(VALID_LOG_LEVELS))}"
            raise ValueError(msg)
        return normalized

    @field_validator("file", mode="after")
    @classmethod
    def validate_log_file_path(cls, v: Path | None) -> Path | None:
        """Validate that the log file is not a directory and its parent exists."""
        if v is not None and v.expanduser().is_dir():
            msg = f"Log file path is a directory: {v.expanduser()}"
            raise ValueError(msg)
        if v is not None and not v.expanduser().parent.exists():
            msg = f"Log file parent directory does not exist: {v.expanduser().parent}"
            raise ValueError(msg)
        return v.expanduser() if v is not None else None


class DursConfig(BaseModel):
    """Top-level configuration."""

    model_config = ConfigDict(extra="forbid")

    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigurationError(Exception):
    """Exception raised when configuration loading or validation fails.

    Carries a detailed, actionable message covering missing files, YAML
    parsing errors and validation failures.
    """


def candidate_config_paths() -> tuple[Path, ...]:
    """Return configuration file locations in order of precedence."""
    candidates = [Path(name) for name in CONFIG_FILE_NAMES]

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    try:
        home = Path.home()
    except (OSError, RuntimeError):
        # Path.home() can fail when HOME is unset and no passwd entry exists
        home = None

    if xdg_config_home:
        candidates.append(Path(xdg_config_home) / "durs" / "config.yaml")
    elif home is not None:
        candidates.append(home / ".config" / "durs" / "config.yaml")
    if home is not None:
        candidates.append(home / ".durs.yaml")
    candidates.append(Path("/etc/durs.yaml"))
    return tuple(candidates)


def discover_config_file() -> Path | None:
    """Find the first existing configuration file.

    Returns:
        Path to the configuration file, or None if no file exists
    """
    for config_path in candidate_config_paths():
        if config_path.is_file():
            return config_path
    return None


def load_config(config_path: Path) -> DursConfig:
    """Load and validate configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Validated DursConfig instance

    Raises:
        ConfigurationError: If the file cannot be loaded or is invalid

    Examples:
        >>> config = load_config(Path("durs.yaml"))
        >>> config.browser.poll_interval
        2.0
    """
    if not config_path.exists():
        msg = (
            f"Configuration file not found: {config_path}\n"
            f"Create the file or omit --config to use the defaults."
        )
        raise ConfigurationError(msg)

    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]  # YAML boundary
    except yaml.YAMLError as e:
        msg = (
            f"Failed to parse YAML configuration file: {config_path}\n"
            f"YAML parsing error: {e}\n"
            f"Please check the file for syntax errors."
        )
        raise ConfigurationError(msg) from e
    except OSError as e:
        msg = f"Failed to read configuration file: {config_path}\nError: {e}\nPlease check file permissions."
        raise ConfigurationError(msg) from e

    # An empty document means "all defaults"
    if raw_data is None:
        raw_data = {}

    if not isinstance(raw_data, dict):
        msg = (
            f"Invalid configuration file format: {config_path}\n"
            f"Expected YAML mapping at root level, got: {type(raw_data).__name__}\n"
            f"Configuration file must contain key-value pairs."
        )
        raise ConfigurationError(msg)

    try:
        config = DursConfig.model_validate(raw_data)
    except ValidationError as e:
        error_lines = ["Configuration validation failed:", ""]
        for error in e.errors():
            field_path = " → ".join(str(loc) for loc in error["loc"])
            error_lines.append(f"  Field: {field_path}")
            error_lines.append(f"  Error: {error['msg']}")
            error_lines.append(f"  Type: {error['type']}")
            error_lines.append("")

        error_lines.append(f"Configuration file: {config_path}")
        error_lines.append("Please fix the above errors and try again.")
        raise ConfigurationError("\n".join(error_lines)) from e

    return config
