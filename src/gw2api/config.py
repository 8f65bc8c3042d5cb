"""Persistent settings for the gw2api command line.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.gw2api/`` on macOS and Windows.  See :func:`get_config_dir`,
  :func:`get_cache_dir` and :func:`get_data_dir`.
* **Settings file** -- a single JSON file holding a
  :class:`~gw2api.models.ClientConfig`.  Loaded by :func:`load_settings`,
  written atomically by :func:`save_settings`.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables and the settings file into the effective
  configuration.

Library users do not need this module; they build a
:class:`~gw2api.models.ClientConfig` directly.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from gw2api.exceptions import ConfigError
from gw2api.models import ClientConfig

_APP_NAME = "gw2api"
_SETTINGS_FILENAME = "config.json"

ENV_LANG = "GW2API_LANG"
ENV_BASE_URL = "GW2API_BASE_URL"
ENV_NO_CACHE = "GW2API_NO_CACHE"

_TRUTHY = ("1", "true", "yes", "on")


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    return Path.home() / f".{_APP_NAME}"


def _xdg_dir(env_var: str, default_segments: tuple[str, ...], fallback_sub: str) -> Path:
    """Resolve and create an application directory under an XDG base."""
    if _is_xdg_platform():
        env_value = os.environ.get(env_var, "")
        base = Path(env_value) if env_value else Path.home().joinpath(*default_segments)
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir() / fallback_sub if fallback_sub else _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Return the settings directory (default ``~/.config/gw2api/``), creating it."""
    return _xdg_dir("XDG_CONFIG_HOME", (".config",), "")


def get_cache_dir() -> Path:
    """Return the cache directory (default ``~/.cache/gw2api/``), creating it.

    The CLI keeps its :class:`~gw2api.storage.DiskStore` here.  Deleting the
    directory also deletes the stored API key.
    """
    return _xdg_dir("XDG_CACHE_HOME", (".cache",), "cache")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it."""
    return _xdg_dir("XDG_DATA_HOME", (".local", "share"), "logs")


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* via a temp file in the same directory and ``os.replace``."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Settings file ---


def settings_path() -> Path:
    return get_config_dir() / _SETTINGS_FILENAME


def load_settings() -> ClientConfig:
    """Load the saved settings, or defaults when no file exists.

    Raises:
        ConfigError: If the file is not valid JSON or fails validation.
    """
    path = settings_path()
    if not path.is_file():
        return ClientConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return ClientConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid settings at {path}: {exc}") from exc


def save_settings(config: ClientConfig) -> None:
    """Persist *config* atomically."""
    data = config.model_dump(mode="json")
    _atomic_write(settings_path(), json.dumps(data, indent=2) + "\n")


def reset_settings() -> ClientConfig:
    """Remove the settings file and return the defaults."""
    path = settings_path()
    if path.is_file():
        path.unlink()
    return ClientConfig()


# --- Precedence resolution ---


def resolve_config(
    cli_lang: Optional[str] = None,
    cli_no_cache: bool = False,
    cli_auth_header: bool = False,
) -> ClientConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags
        2. Environment variables (``GW2API_LANG``, ``GW2API_BASE_URL``,
           ``GW2API_NO_CACHE``)
        3. Settings file
        4. Defaults

    Disabling the cache turns off both serving and storing responses.
    """
    config = load_settings()
    updates: dict[str, object] = {}

    env_lang = os.environ.get(ENV_LANG)
    if env_lang:
        updates["lang"] = env_lang
    env_base_url = os.environ.get(ENV_BASE_URL)
    if env_base_url:
        updates["base_url"] = env_base_url
    if os.environ.get(ENV_NO_CACHE, "").lower() in _TRUTHY:
        updates["cache_enabled"] = False
        updates["store_writes_enabled"] = False

    if cli_lang is not None:
        updates["lang"] = cli_lang
    if cli_no_cache:
        updates["cache_enabled"] = False
        updates["store_writes_enabled"] = False
    if cli_auth_header:
        updates["use_auth_header"] = True

    if not updates:
        return config
    try:
        return ClientConfig.model_validate({**config.model_dump(), **updates})
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration override: {exc}") from exc
