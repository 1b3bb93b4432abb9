"""Configuration store: load, save and update the application settings."""

import json
import logging
import os
import tempfile
from collections.abc import Mapping
from contextlib import suppress
from pathlib import Path
from typing import Any

from .defaults import DEFAULTS
from .defaults import EDITABLE_SECTIONS
from .exceptions import ConfigDirectoryError
from .exceptions import ConfigFileError
from .migration import LegacyMigrator
from .models import Configuration
from .models import LoadStatus
from .models import Settings
from .paths import build_path_layout
from .utils import deep_clone
from .utils import deep_merge

logger = logging.getLogger(__name__)


class ConfigStore:
    """Loads and persists the configuration for one application root.

    The store owns the startup sequence: compute the canonical paths, layer
    the user's config file over the factory defaults, create the runtime
    directories and relocate legacy data. Only the four editable sections
    (Api, UI, Cache, Export) are ever written back; Paths is recomputed at
    every load.

    Args:
        app_root: Directory the application is installed in
        migrator: Legacy migrator to run after loading (default: LegacyMigrator())
    """

    def __init__(self, app_root: Path | str, migrator: LegacyMigrator | None = None):
        """Initialize the store for an application root.

        Args:
            app_root: Directory the application is installed in
            migrator: Optional migrator, injectable for tests
        """
        self.app_root = Path(app_root).absolute()
        self.paths = build_path_layout(self.app_root)
        self.migrator = migrator if migrator is not None else LegacyMigrator()

    # ===== Load =====

    def load(self) -> Configuration:
        """Resolve the configuration for this session.

        Resolution order (later overrides earlier):
        1. Factory defaults
        2. Editable sections of the config file, when present and readable

        A missing file is created from the defaults. A malformed file is
        ignored and left untouched.

        Returns:
            Configuration ready for use

        Raises:
            ConfigDirectoryError: If the cache or browser-engine directory
                cannot be created
        """
        working = deep_clone(DEFAULTS)

        if not self.paths.config_file.exists():
            self.migrator.adopt_legacy_config(self.app_root, self.paths)

        if self.paths.config_file.exists():
            user = self._read_json(self.paths.config_file)
            if user is None:
                status = LoadStatus.MALFORMED
            else:
                status = LoadStatus.LOADED
                working = self._merge_editable(working, user)
            configuration = Configuration(Settings.from_mapping(working), self.paths, status)
        else:
            configuration = Configuration(Settings.from_mapping(working), self.paths, LoadStatus.CREATED)
            logger.info(f"No configuration at {self.paths.config_file}, writing defaults")
            self.save(configuration)

        self._ensure_runtime_dirs()

        configuration.migration_report = self.migrator.run(self.app_root, configuration)
        return configuration

    # ===== Save =====

    def save(self, configuration: Configuration, path: Path | None = None) -> bool:
        """Write the editable sections to the config file.

        Failures are logged and never raised; the in-memory configuration
        stays valid either way.

        Args:
            configuration: Configuration to persist
            path: Target file (default: the canonical config file)

        Returns:
            True if the file was written
        """
        target = path if path is not None else configuration.paths.config_file
        try:
            self._write_json(target, configuration.settings.to_dict())
        except ConfigFileError as e:
            logger.warning(f"{e} - settings kept in memory only")
            return False
        return True

    # ===== Generic Settings Update =====

    def update(self, configuration: Configuration, updates: Mapping[str, Any], persist: bool = True) -> Configuration:
        """Apply raw updates to the editable sections.

        Updates use the file's layout, e.g. ``{"UI": {"SidebarWidth": 240}}``.
        Sections other than the editable four are ignored and values of the
        wrong type fall back to their defaults.

        Args:
            configuration: Current configuration
            updates: Nested mapping to deep merge into the settings
            persist: Save the result to the config file

        Returns:
            New configuration carrying the updated settings
        """
        merged = self._merge_editable(configuration.settings.to_dict(), updates)
        updated = Configuration(
            Settings.from_mapping(merged),
            configuration.paths,
            configuration.status,
            configuration.migration_report,
        )
        if persist:
            self.save(updated)
        return updated

    # ===== Private Helpers =====

    def _merge_editable(self, working: dict[str, Any], user: Mapping[str, Any]) -> dict[str, Any]:
        """Layer the editable sections of user over working."""
        result = dict(working)
        for section in EDITABLE_SECTIONS:
            if section not in user:
                continue
            if isinstance(user[section], Mapping):
                result[section] = deep_merge(result[section], user[section])
            else:
                logger.warning(f"Ignoring section '{section}': expected an object, got {type(user[section]).__name__}")
        return result

    def _ensure_runtime_dirs(self) -> None:
        for directory in (self.paths.cache_dir, self.paths.webview_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ConfigDirectoryError(f"Cannot create required directory {directory}: {e}") from e

    def _read_json(self, path: Path) -> dict[str, Any] | None:
        """Read the config file.

        Args:
            path: Path to JSON file

        Returns:
            Parsed object, or None if the file cannot be read or is not a
            JSON object
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as e:
            logger.warning(f"Failed to read configuration from {path}, using defaults: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(
                f"Configuration at {path} is not an object (got {type(data).__name__}), using defaults"
            )
            return None
        return data

    def _write_json(self, path: Path, data: dict[str, Any]) -> None:
        """Write the config file through a temporary file in the same directory.

        Args:
            path: Path to JSON file
            data: Dictionary to write

        Raises:
            ConfigFileError: If write fails
        """
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
            ) as f:
                tmp_name = f.name
                json.dump(data, f, indent=2)
                f.write("\n")
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None:
                with suppress(OSError):
                    os.unlink(tmp_name)
            raise ConfigFileError(f"Failed to write configuration to {path}: {e}") from e
