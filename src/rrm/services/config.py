# Filename: config.py
# Author: Rich Lewis @RichLewis007
# Description: Configuration helpers. Resolves the trash store from the home directory, creates
#              application folders, and wraps Qt QSettings for persisting viewer preferences.

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from platformdirs import PlatformDirs

from .errors import ConfigurationError

if TYPE_CHECKING:
    from PySide6.QtCore import QByteArray, QSettings

APP_NAME = "RecoverableRm"
ORG_NAME = "Rich Lewis"

TRASH_SUBDIR = Path(".local") / "share" / "Trash"

_KEY_WINDOW_GEOMETRY = "window/geometry"
_KEY_SORT_COLUMN = "table/sort_column"
_KEY_DEBUG_LOG_LEVEL = "logging/debug_level"


def ensure_app_dirs() -> Path:
    # Ensure the configuration directories exist and return the config path.
    dirs = PlatformDirs(appname=APP_NAME, appauthor=ORG_NAME)
    config_path = Path(dirs.user_config_dir)
    log_path = Path(dirs.user_log_dir)
    data_path = Path(dirs.user_data_dir)

    for path in (config_path, log_path, data_path):
        path.mkdir(parents=True, exist_ok=True)

    return config_path


@dataclass(frozen=True, slots=True)
class TrashStore:
    # The pair of trash directories shared by every operation in a run.

    files_root: Path
    info_root: Path

    @classmethod
    def from_home(cls, home: Path | None = None) -> TrashStore:
        # Build the store under ``home`` (defaults to the user's home directory).
        if home is None:
            try:
                home = Path.home()
            except (KeyError, RuntimeError) as exc:
                raise ConfigurationError(f"cannot determine home directory: {exc}") from exc
        if not home.is_dir():
            raise ConfigurationError(f"home directory {home} does not exist", path=home)
        base = home / TRASH_SUBDIR
        return cls(files_root=base / "files", info_root=base / "info")

    @property
    def base(self) -> Path:
        return self.files_root.parent

    def ensure(self) -> None:
        # Create both directories; concurrent callers are fine.
        for path in (self.files_root, self.info_root):
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise ConfigurationError(
                    f"cannot create trash directory {path}: {exc.strerror or exc}",
                    path=path,
                ) from exc


@dataclass(slots=True)
class SettingsStore:
    # Wrapper around Qt settings for trash viewer state.

    filename: str = "settings.ini"
    _path: Path = field(init=False)
    _settings: QSettings = field(init=False)

    def __post_init__(self) -> None:
        from PySide6.QtCore import QSettings

        config_dir = ensure_app_dirs()
        object.__setattr__(self, "_path", config_dir / self.filename)
        object.__setattr__(
            self,
            "_settings",
            QSettings(str(self._path), QSettings.Format.IniFormat),
        )

    @property
    def path(self) -> Path:
        # Return the filesystem path backing the settings file.
        return self._path

    # ------------------------------------------------------------------
    # Window geometry

    def load_window_geometry(self) -> QByteArray | None:
        # Return the previously stored window geometry, if any.
        from PySide6.QtCore import QByteArray

        value = self._settings.value(_KEY_WINDOW_GEOMETRY)
        if isinstance(value, QByteArray):
            return value
        return None

    def save_window_geometry(self, geometry: QByteArray) -> None:
        self._settings.setValue(_KEY_WINDOW_GEOMETRY, geometry)
        self._settings.sync()

    # ------------------------------------------------------------------
    # Table preferences

    def load_sort_column(self, default: int = 0) -> int:
        # Fetch the column the trash table was last sorted by.
        value = self._settings.value(_KEY_SORT_COLUMN)
        try:
            return int(value) if value is not None else default
        except (TypeError, ValueError):
            return default

    def save_sort_column(self, column: int) -> None:
        self._settings.setValue(_KEY_SORT_COLUMN, column)
        self._settings.sync()

    # ------------------------------------------------------------------
    # Logging preferences

    def load_debug_log_level(self, default: bool = False) -> bool:
        # Return whether debug log level is enabled, defaulting to default.
        value = self._settings.value(_KEY_DEBUG_LOG_LEVEL)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in {"1", "true", "yes", "on"}
        return default

    def save_debug_log_level(self, enabled: bool) -> None:
        self._settings.setValue(_KEY_DEBUG_LOG_LEVEL, enabled)
        self._settings.sync()
