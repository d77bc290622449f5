"""Server settings from CLI args, env vars, and config files."""

from __future__ import annotations

import functools
import os
import tomllib
import typing
from pathlib import Path

import pydantic

from . import flags

CONFIG_FILE_NAME = ".data-analyzer.toml"
ENV_PREFIX = "DATA_ANALYZER_"


class ConfigError(Exception): ...


def _get_home_config_file() -> Path | None:
    home_config = Path.home() / CONFIG_FILE_NAME
    if home_config.exists():
        return home_config
    return None


@functools.cache
def _get_home_config() -> dict | None:
    if home_config_path := _get_home_config_file():
        with open(home_config_path, "rb") as f:
            return tomllib.load(f)
    return None


def _get_project_config_file() -> Path | None:
    """Search upward from cwd for the config file, stopping at git root."""
    current = Path.cwd()
    for directory in [current, *current.parents]:
        config_path = directory / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path
        if (directory / ".git").exists():
            break
    return None


@functools.cache
def _get_project_config() -> dict | None:
    if project_config_path := _get_project_config_file():
        with open(project_config_path, "rb") as f:
            return tomllib.load(f)
    return None


class _PartialSettings(typing.TypedDict, total=False):
    host: object
    port: object
    debug: object
    open_browser: object


def _first_set(*values: object) -> object:
    for value in values:
        if value is not None:
            return value
    return None


def _load_settings(**flags_: typing.Unpack[_PartialSettings]) -> dict[str, object]:
    """
    Merge settings from every source.

    Priority: CLI flags > env vars > project config > home config > defaults
    """
    home_config = _get_home_config() or {}
    project_config = _get_project_config() or {}
    file_config = {**home_config, **project_config}

    merged: dict[str, object] = {}
    for field in _PartialSettings.__annotations__:
        value = _first_set(
            flags_.get(field),
            os.environ.get(f"{ENV_PREFIX}{field.upper()}"),
            file_config.get(field),
        )
        # Unset fields fall back to the model defaults.
        if value is not None:
            merged[field] = value
    return merged


def get_settings(flags_: flags.ServerFlags | None = None) -> Settings:
    flags_ = flags_ or flags.ServerFlags()
    merged = _load_settings(
        host=flags_.host,
        port=flags_.port,
        debug=flags_.debug,
        open_browser=flags_.open_browser,
    )
    try:
        return Settings(**merged)  # ty: ignore
    except pydantic.ValidationError as e:
        raise ConfigError(str(e)) from e


class Settings(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore", frozen=True)

    host: str = "127.0.0.1"
    port: int = pydantic.Field(default=5000, ge=1, le=65535)
    debug: bool = False
    open_browser: bool = False

    @property
    def url(self) -> str:
        """The address the dashboard is reachable at."""
        return f"http://{self.host}:{self.port}"
