"""ReqSettings: one object for CLI flags, ``REQCTL_*`` env vars and the config file.

Sources, strongest first:

1. keyword arguments (the global CLI flags),
2. environment (``REQCTL_QUIET=1``, ``REQCTL_CHECK__ALLOWED_REQUIREMENTS='["SYS-.*"]'``),
3. the config file found by :func:`reqctl.config.discovery.find_config`,
4. defaults of the section models in :mod:`reqctl.config.models`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from reqctl.config.discovery import find_config, read_config_table
from reqctl.config.models import CheckConfig, HtmlConfig, MarkdownConfig, ReqConfig

# Config file chosen by ReqSettings.from_cli for the settings object under construction.
_pending = threading.local()


class ConfigFileSource(PydanticBaseSettingsSource):
    """Settings source over a ``reqctl.toml`` or ``pyproject.toml`` ``[tool.reqctl]`` table.

    The sections are validated up front so a bad value is reported against
    the file it came from.  Both failure modes surface as ClickException.
    """

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._table: dict[str, Any] = {}
        if path is None:
            return
        try:
            self._table = read_config_table(path)
            ReqConfig.model_validate(self._table)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc
        except ValidationError as exc:
            raise click.ClickException(f"Invalid settings in {path}:\n{exc}") from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._table.get(field_name), field_name, field_name in self._table

    def __call__(self) -> dict[str, Any]:
        return dict(self._table)


class ReqSettings(BaseSettings):
    """Resolved settings for one CLI invocation.

    Attributes:
        project_root: Directory holding the config file, or the CWD without
            one.  ``.reqctl/templates`` overrides are looked up here.
        config_path: Config file in effect, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "REQCTL_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    check: CheckConfig = Field(default_factory=CheckConfig)
    markdown: MarkdownConfig = Field(default_factory=MarkdownConfig)
    html: HtmlConfig = Field(default_factory=HtmlConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        config_file = ConfigFileSource(settings_cls, getattr(_pending, "path", None))
        return init_settings, env_settings, config_file

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **flags: Any,
    ) -> ReqSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist means "no config file";
        it does not fall back to discovery.
        """
        if config_path:
            explicit = Path(config_path)
            path = explicit if explicit.is_file() else None
        else:
            path = find_config(project_root)

        if project_root is None:
            project_root = path.parent if path is not None else Path.cwd()

        _pending.path = path
        try:
            return cls(project_root=project_root, config_path=path, **flags)
        finally:
            _pending.path = None
