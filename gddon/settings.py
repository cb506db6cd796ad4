"""Settings — layered configuration for a gddon run.

Values are merged in increasing priority: built-in defaults, the user file
(``~/.config/gddon/config.yaml``), the project file (``<root>/gddon.yaml``),
then explicit overrides from the command line.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

from gddon.errors import ConfigError

USER_CONFIG_ENV = "GDDON_CONFIG_HOME"
PROJECT_CONFIG_FILE = "gddon.yaml"


@dataclass(frozen=True)
class Settings:
    """Names and flags shared by every component."""

    verbose: bool = False
    manifest_name: str = ".gddon"
    cache_dir: str = ".gddon.d"
    addons_dir: str = "addons"
    project_marker: str = "project.godot"

    def manifest_path(self, root: Path) -> Path:
        return root / self.manifest_name

    def cache_root(self, root: Path) -> Path:
        return root / self.cache_dir


def user_config_path() -> Path:
    """Return the user-level settings file path."""
    base = os.getenv(USER_CONFIG_ENV)
    if base:
        return Path(base) / "config.yaml"
    return Path.home() / ".config" / "gddon" / "config.yaml"


def load_settings(project_root: str | Path | None = None, **overrides) -> Settings:
    """Build the effective settings for a project.

    Args:
        project_root: Project directory holding an optional ``gddon.yaml``.
        **overrides: Explicit values (e.g. ``verbose=True``); ``None`` values
            are ignored so unset command-line options do not clobber files.

    Raises:
        ConfigError: If a settings file is malformed or names unknown keys.
    """
    settings = Settings()
    settings = _apply(settings, _read_config_file(user_config_path()))
    if project_root is not None:
        project_file = Path(project_root) / PROJECT_CONFIG_FILE
        settings = _apply(settings, _read_config_file(project_file))
    return _apply(settings, {k: v for k, v in overrides.items() if v is not None})


def _read_config_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Couldn't read {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping of settings")
    return data


def _apply(settings: Settings, values: dict) -> Settings:
    known = {f.name: f for f in fields(Settings)}
    unknown = sorted(set(values) - set(known))
    if unknown:
        raise ConfigError(f"Unknown settings: {', '.join(unknown)}")

    for key, value in values.items():
        expected = bool if key == "verbose" else str
        if not isinstance(value, expected):
            raise ConfigError(
                f"Setting '{key}' must be a {expected.__name__}, got {value!r}"
            )
    return replace(settings, **values)
