"""chatdesk-config: settings store and legacy data migration for ChatDesk.

This library owns the application's on-disk state:
- canonical locations under ``<app root>/_AppData``
- the user-editable ``config.json`` layered over factory defaults
- one-time relocation of data left behind by earlier releases
- the inventory used by the uninstall tool

Public API:
    ConfigStore: Load, save and update the configuration
    Configuration: Resolved settings plus canonical paths for one session
    LegacyMigrator: Moves legacy data into the canonical layout
    UninstallInventory: Finds and removes application data
    build_path_layout: Canonical paths for an application root
    deep_merge, deep_clone, get_by_path, NOT_FOUND: Mapping utilities
    ConfigError, ConfigFileError, ConfigValidationError, ConfigDirectoryError: Exception types

Example:
    ```python
    from chatdesk_config import ConfigStore

    store = ConfigStore(app_root)
    config = store.load()

    width = config.ui.sidebar_width
    debounce = config.get_value("UI.SearchDebounceMs")

    config = store.update(config, {"UI": {"Theme": "light"}})
    ```
"""

from .defaults import DEFAULTS
from .defaults import EDITABLE_SECTIONS
from .exceptions import ConfigDirectoryError
from .exceptions import ConfigError
from .exceptions import ConfigFileError
from .exceptions import ConfigValidationError
from .migration import LegacyMigrator
from .models import Configuration
from .models import LoadStatus
from .models import MigrationReport
from .models import PathSet
from .models import RemovalItem
from .models import RemovalResult
from .models import Settings
from .models import StepResult
from .models import StepStatus
from .paths import build_path_layout
from .store import ConfigStore
from .uninstall import UninstallInventory
from .utils import NOT_FOUND
from .utils import deep_clone
from .utils import deep_merge
from .utils import get_by_path

__version__ = "0.1.0"

__all__ = [
    "ConfigStore",
    "Configuration",
    "Settings",
    "LoadStatus",
    "PathSet",
    "build_path_layout",
    "DEFAULTS",
    "EDITABLE_SECTIONS",
    "LegacyMigrator",
    "MigrationReport",
    "StepResult",
    "StepStatus",
    "UninstallInventory",
    "RemovalItem",
    "RemovalResult",
    "deep_merge",
    "deep_clone",
    "get_by_path",
    "NOT_FOUND",
    "ConfigError",
    "ConfigFileError",
    "ConfigValidationError",
    "ConfigDirectoryError",
]
