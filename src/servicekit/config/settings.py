"""Unified settings — init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — explicit overrides from the host application
  2. Env vars     — ``SERVICEKIT_*`` prefix
  3. TOML file    — ``servicekit.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from servicekit.config.discovery import find_config, read_toml
from servicekit.config.models import FaultConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``servicekit.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ServiceKitSettings(BaseSettings):
    """Settings for logging and fault reporting.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        verbose: DEBUG-level logging for the ``servicekit`` logger.
        log_json: Render log lines as JSON.
        faults: Fault logger options.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SERVICEKIT_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    verbose: bool = False
    log_json: bool = False
    faults: FaultConfig = Field(default_factory=FaultConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> ServiceKitSettings:
        """Discover ``servicekit.toml`` (or use *config_path*) and build settings."""
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
