# src/weeklyctl/engine/config.py

"""
Store configuration.

Two layers:
- `StoreConfig`: where weekly files live (root directory + optional
  group). An explicit value handed to the location resolver and the
  store; nothing here is process-global.
- `Settings`: user options kept in `<root>/config.yml`.

Precedence for the store root: explicit argument > WEEKLYCTL_HOME >
~/.weeklyctl.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

HOME_ENV: Final[str] = "WEEKLYCTL_HOME"
DEFAULT_DIR_NAME: Final[str] = ".weeklyctl"
SETTINGS_FILE_NAME: Final[str] = "config.yml"


def default_root() -> Path:
    """Return the store root from WEEKLYCTL_HOME or the home directory."""
    raw = os.getenv(HOME_ENV)
    if raw is not None and raw.strip():
        return Path(raw).expanduser()
    return Path.home() / DEFAULT_DIR_NAME


# ---------------------------------------------------------------------
# Store location
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class StoreConfig:
    """
    Where a weekly store keeps its files.

    `group` is a namespace: each group gets its own subdirectory of
    `root`. None (or blank) selects the root itself.
    """

    root: Path
    group: Optional[str] = None

    def __post_init__(self) -> None:
        group = (self.group or "").strip() or None
        if group is not None and (group in {".", ".."} or "/" in group or "\\" in group):
            raise ValueError(f"Invalid group name: {self.group!r}")
        object.__setattr__(self, "root", Path(self.root))
        object.__setattr__(self, "group", group)

    @property
    def store_dir(self) -> Path:
        return self.root / self.group if self.group else self.root

    def with_group(self, group: Optional[str]) -> "StoreConfig":
        return StoreConfig(root=self.root, group=group)


# ---------------------------------------------------------------------
# User settings (config.yml)
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Settings:
    verbose: bool = False
    group: Optional[str] = None
    log_file: Optional[str] = None

    def log_path(self, root: str | Path) -> Optional[Path]:
        """`log_file` as a path; relative values are taken from `root`."""
        if self.log_file is None:
            return None
        return Path(root) / Path(self.log_file).expanduser()


def settings_path(root: str | Path) -> Path:
    return Path(root) / SETTINGS_FILE_NAME


def load_settings(root: str | Path, *, create: bool = True) -> Settings:
    """
    Read `<root>/config.yml`.

    A missing file yields defaults and, when `create` is set, is written
    out so the user has something to edit.
    """
    path = settings_path(root)

    if not path.exists():
        settings = Settings()
        if create:
            save_settings(root, settings)
        return settings

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(str(path), f"Cannot read file: {e}") from e

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(str(path), f"Invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(str(path), "YAML root must be a mapping/dictionary")

    return Settings(
        verbose=_bool_field(str(path), data, "verbose", default=False),
        group=_optional_str_field(str(path), data, "group"),
        log_file=_optional_str_field(str(path), data, "log_file"),
    )


def save_settings(root: str | Path, settings: Settings) -> Path:
    path = settings_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "verbose": settings.verbose,
        "group": settings.group,
        "log_file": settings.log_file,
    }
    path.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8")
    logger.debug("Settings written to %s", path)
    return path


def _bool_field(path: str, data: dict[str, Any], key: str, *, default: bool) -> bool:
    value = data.get(key, default)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(path, f"YAML key '{key}' must be true or false")
    return value


def _optional_str_field(path: str, data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(path, f"YAML key '{key}' must be a string")
    return value.strip() or None
