"""Configuration schema for prtests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from prtests.exceptions import ConfigError

DEFAULT_CONFIG_NAME = "prtests.yaml"


class LoggingConfig(BaseModel):
    """Logging configuration.

    Logs always go to stderr; stdout is reserved for the directive.

    Attributes:
        level: Minimum level to emit.
        renderer: "console" for human-readable lines, "json" for one JSON
                  object per line.
    """

    level: Literal["debug", "info", "warning", "error"] = "warning"
    renderer: Literal["console", "json"] = "console"


class PrTestsConfig(BaseModel):
    """Complete prtests configuration.

    Attributes:
        default_mode: Mode used when the caller omits it.
        logging: Logging configuration.

    Example:
        >>> config = PrTestsConfig(default_mode="runTests")
        >>> config.logging.level
        'warning'
    """

    default_mode: str = ""
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def to_yaml(self) -> str:
        """Serialize the config to YAML."""
        data = self.model_dump(mode="json")
        return yaml.dump(data, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_yaml(cls, yaml_content: str, *, config_path: Path | None = None) -> PrTestsConfig:
        """Parse config from YAML content.

        Args:
            yaml_content: YAML string to parse.
            config_path: Source file, used in error reports.

        Returns:
            Parsed PrTestsConfig instance.

        Raises:
            ConfigError: If the YAML or its contents are invalid.
        """
        try:
            data: Any = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            msg = f"Invalid YAML: {e}"
            raise ConfigError(msg, config_path=config_path) from e

        # An empty file means all defaults
        if data is None:
            data = {}

        if not isinstance(data, dict):
            msg = "Config YAML must be a mapping"
            raise ConfigError(msg, config_path=config_path)

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            msg = f"Invalid config value for '{field}': {first['msg']}"
            raise ConfigError(msg, config_path=config_path, field=field) from e

    @classmethod
    def load(cls, path: Path) -> PrTestsConfig:
        """Load config from a YAML file.

        Raises:
            ConfigError: If the file doesn't exist or is invalid.
        """
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise ConfigError(msg, config_path=path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Cannot read config file: {path} ({e})"
            raise ConfigError(msg, config_path=path) from e
        return cls.from_yaml(content, config_path=path)

    @classmethod
    def discover(cls, base_dir: Path, path: Path | None = None) -> PrTestsConfig:
        """Load an explicit config, else prtests.yaml in base_dir, else defaults.

        Args:
            base_dir: Directory searched for prtests.yaml.
            path: Explicit config path, takes precedence.

        Returns:
            The resolved configuration.
        """
        if path is not None:
            return cls.load(path)
        default_path = base_dir / DEFAULT_CONFIG_NAME
        if default_path.exists():
            return cls.load(default_path)
        return cls.default()

    @classmethod
    def default(cls) -> PrTestsConfig:
        """Create a default configuration."""
        return cls()
