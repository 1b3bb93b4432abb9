"""Canonical and legacy on-disk locations.

Everything the application keeps lives under ``<root>/_AppData``. Earlier
releases scattered the same data elsewhere:

- the previous release kept dot-prefixed items directly in the root
  (``.cache``, ``.webview2``, ``.credentials``, ``.windowstate``);
- an older release kept the same four items in a ``Data`` holding directory;
- a ``Settings`` directory held a standalone ``config.json``;
- ``.chatindex`` is an index directory that is no longer used at all;
- the earliest release stored its data in the OS per-user data directory.
"""

from pathlib import Path

from platformdirs import user_data_dir

from .models import LegacyLocation
from .models import PathSet

APP_NAME = "ChatDesk"

APP_DATA_DIRNAME = "_AppData"
CONFIG_FILENAME = "config.json"
CACHE_DIRNAME = "cache"
WEBVIEW_DIRNAME = "webview2"
CREDENTIALS_FILENAME = "credentials"
WINDOW_STATE_FILENAME = "windowstate"

LEGACY_HOLDING_DIRNAME = "Data"
LEGACY_SETTINGS_DIRNAME = "Settings"
LEGACY_CONFIG_FILENAME = "config.json"
DEPRECATED_INDEX_DIRNAME = ".chatindex"


def build_path_layout(app_root: Path | str) -> PathSet:
    """Compute the canonical paths for an application root.

    Args:
        app_root: Directory the application is installed in

    Returns:
        PathSet with every location under ``<root>/_AppData``
    """
    app_data = Path(app_root).absolute() / APP_DATA_DIRNAME
    return PathSet(
        app_data=app_data,
        config_file=app_data / CONFIG_FILENAME,
        cache_dir=app_data / CACHE_DIRNAME,
        webview_dir=app_data / WEBVIEW_DIRNAME,
        credentials_file=app_data / CREDENTIALS_FILENAME,
        window_state_file=app_data / WINDOW_STATE_FILENAME,
    )


def dotted_legacy_locations(paths: PathSet) -> list[LegacyLocation]:
    """Items the previous release kept directly in the application root."""
    return [
        LegacyLocation(f".{CACHE_DIRNAME}", paths.cache_dir, is_dir=True),
        LegacyLocation(f".{WEBVIEW_DIRNAME}", paths.webview_dir, is_dir=True),
        LegacyLocation(f".{CREDENTIALS_FILENAME}", paths.credentials_file, is_dir=False),
        LegacyLocation(f".{WINDOW_STATE_FILENAME}", paths.window_state_file, is_dir=False),
    ]


def holding_legacy_locations(paths: PathSet) -> list[LegacyLocation]:
    """Items an older release kept inside the ``Data`` holding directory."""
    return [
        LegacyLocation(f"{LEGACY_HOLDING_DIRNAME}/{CACHE_DIRNAME}", paths.cache_dir, is_dir=True),
        LegacyLocation(f"{LEGACY_HOLDING_DIRNAME}/{WEBVIEW_DIRNAME}", paths.webview_dir, is_dir=True),
        LegacyLocation(f"{LEGACY_HOLDING_DIRNAME}/{CREDENTIALS_FILENAME}", paths.credentials_file, is_dir=False),
        LegacyLocation(f"{LEGACY_HOLDING_DIRNAME}/{WINDOW_STATE_FILENAME}", paths.window_state_file, is_dir=False),
    ]


def legacy_user_data_dir() -> Path:
    """Per-user data directory used by the earliest release."""
    return Path(user_data_dir(APP_NAME, appauthor=False))
