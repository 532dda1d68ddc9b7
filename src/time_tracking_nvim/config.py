"""Configuration models and helpers for the preview plugin."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, replace
from datetime import timedelta
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .paths import get_config_path

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when the config file exists but cannot be used."""


class ConfigFile(BaseModel):
    """Validated contents of ``config.toml``."""

    data_directory: Optional[Path] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    auto_open: bool = True
    open_delay_ms: int = Field(default=200, ge=0)
    close_delay_ms: int = Field(default=30, ge=0)
    width_divisor: int = Field(default=3, ge=1)
    min_width: int = Field(default=20, ge=1)

    # The file is shared with the command-line tracker, which has its own keys.
    model_config = ConfigDict(extra="ignore")


@dataclass(slots=True)
class PreviewSettings:
    """Runtime configuration for classification and the preview window."""

    data_directory: Optional[Path] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    auto_open: bool = True
    open_delay: timedelta = timedelta(milliseconds=200)
    close_delay: timedelta = timedelta(milliseconds=30)
    width_divisor: int = 3
    min_width: int = 20

    @classmethod
    def from_model(cls, model: ConfigFile) -> "PreviewSettings":
        data_directory = (
            model.data_directory.expanduser() if model.data_directory else None
        )
        return cls(
            data_directory=data_directory,
            prefix=model.prefix,
            suffix=model.suffix,
            auto_open=model.auto_open,
            open_delay=timedelta(milliseconds=model.open_delay_ms),
            close_delay=timedelta(milliseconds=model.close_delay_ms),
            width_divisor=model.width_divisor,
            min_width=model.min_width,
        )

    @classmethod
    def from_file(cls, path: Optional[Path] = None) -> "PreviewSettings":
        """Load settings from ``path`` (default: the user config file).

        A missing file yields the defaults.
        """
        config_path = Path(path) if path is not None else get_config_path()
        if not config_path.exists():
            logger.debug("No config file at %s; using defaults.", config_path)
            return cls()
        try:
            with config_path.open("rb") as handle:
                raw = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Could not read {config_path}: {exc}") from exc
        return cls.from_mapping(raw, source=str(config_path))

    @classmethod
    def from_mapping(cls, raw: dict[str, Any], source: str = "<config>") -> "PreviewSettings":
        try:
            model = ConfigFile.model_validate(raw)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration in {source}: {exc}") from exc
        return cls.from_model(model)

    def with_overrides(self, overrides: dict[str, Any]) -> "PreviewSettings":
        """Return a copy with editor-supplied values applied on top.

        Keys use the config file names; ``None`` values are ignored.
        """
        values = {key: value for key, value in overrides.items() if value is not None}
        if not values:
            return self
        merged = self.as_config_dict()
        merged.update(values)
        return PreviewSettings.from_mapping(merged, source="editor variables")

    def as_config_dict(self) -> dict[str, Any]:
        return {
            "data_directory": self.data_directory,
            "prefix": self.prefix,
            "suffix": self.suffix,
            "auto_open": self.auto_open,
            "open_delay_ms": round(self.open_delay.total_seconds() * 1000),
            "close_delay_ms": round(self.close_delay.total_seconds() * 1000),
            "width_divisor": self.width_divisor,
            "min_width": self.min_width,
        }

    def with_data_directory(self, data_directory: Optional[Path]) -> "PreviewSettings":
        if data_directory is None:
            return self
        return replace(self, data_directory=Path(data_directory).expanduser())
