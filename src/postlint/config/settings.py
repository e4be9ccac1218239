"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``POSTLINT_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``postlint.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from postlint.config.discovery import find_config
from postlint.config.models import LintConfig, NewConfig, SiteConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``postlint.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the TOML path during construction.
_tls = threading.local()


class PostlintSettings(BaseSettings):
    """Settings for the whole CLI, frozen after construction.

    Attributes:
        site_root: Directory holding ``postlint.toml`` (or CWD when none
            was found). Post directories resolve against it.
        config_path: The TOML file actually used, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "POSTLINT_",
        "env_nested_delimiter": "__",
    }

    site_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    site: SiteConfig = Field(default_factory=SiteConfig)
    lint: LintConfig = Field(default_factory=LintConfig)
    new: NewConfig = Field(default_factory=NewConfig)

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
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        site_root: Path | None = None,
        **cli_flags: Any,
    ) -> PostlintSettings:
        """Construct settings from a CLI invocation.

        Discovers ``postlint.toml`` via walk-up from *site_root* (or uses
        the explicit *config_path*). Without an explicit *site_root* the
        config file's directory becomes the site root.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
            toml_path = p
        else:
            toml_path = find_config(site_root)

        resolved_root = site_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(site_root=resolved_root, config_path=toml_path, **cli_flags)
        except ValidationError as exc:
            where = f" in {toml_path}" if toml_path else ""
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
            msg = f"Invalid configuration{where}: {problems}"
            raise click.ClickException(msg) from exc
        finally:
            _tls.toml_path = None
