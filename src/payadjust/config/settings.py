"""Unified settings — env vars and TOML config in one frozen object.

Priority chain (highest to lowest):
  1. Init kwargs  — explicit overrides from the composing caller
  2. Env vars     — ``PAYADJUST_*`` prefix, ``__`` for nesting
  3. TOML file    — ``payadjust.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from payadjust.config.discovery import find_config
from payadjust.config.models import RulesConfig
from payadjust.domain.errors import ConfigurationError


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``payadjust.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigurationError(f"Invalid TOML in {toml_path}: {exc}") from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class PayadjustSettings(BaseSettings):
    """Settings for composing the rule registry and the ambient stack.

    Attributes:
        config_path: TOML file the settings were read from, if any.
        verbose: DEBUG logging for ``payadjust`` and telemetry spans.
        log_json: JSON log lines instead of the console renderer.
        rules: Rule order, default rule, and per-rule thresholds.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PAYADJUST_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    verbose: bool = False
    log_json: bool = False
    rules: RulesConfig = Field(default_factory=RulesConfig)

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
    ) -> PayadjustSettings:
        """Discover ``payadjust.toml`` (or use *config_path*) and build settings.

        Raises:
            ConfigurationError: if an explicit *config_path* does not exist
                or the TOML cannot be parsed.
        """
        toml_path: Path | None
        if config_path is not None:
            toml_path = Path(config_path)
            if not toml_path.is_file():
                raise ConfigurationError(f"Config file not found: {toml_path}")
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
