"""Relocation of data left behind by earlier releases."""

import logging
import shutil
from contextlib import suppress
from pathlib import Path

from .models import Configuration
from .models import LegacyLocation
from .models import MigrationReport
from .models import PathSet
from .models import StepResult
from .models import StepStatus
from .paths import DEPRECATED_INDEX_DIRNAME
from .paths import LEGACY_CONFIG_FILENAME
from .paths import LEGACY_HOLDING_DIRNAME
from .paths import LEGACY_SETTINGS_DIRNAME
from .paths import dotted_legacy_locations
from .paths import holding_legacy_locations

logger = logging.getLogger(__name__)

# Files that may be left in the legacy settings directory without holding user data
JUNK_FILENAMES = frozenset({"desktop.ini", "thumbs.db", ".ds_store"})
JUNK_SUFFIXES = frozenset({".bak", ".tmp", ".log"})


def has_data(path: Path) -> bool:
    """Whether a canonical location already holds user data.

    A file always counts. A directory counts when it has at least one
    top-level entry, even if that entry is an empty subdirectory.
    """
    if not path.exists():
        return False
    if path.is_file():
        return True
    try:
        return any(path.iterdir())
    except OSError:
        # Unreadable: treat as occupied so nothing gets written over it
        return True


def discard(path: Path) -> None:
    """Remove a file or directory tree, ignoring any failure."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path, ignore_errors=True)
    else:
        with suppress(OSError):
            path.unlink()


class LegacyMigrator:
    """Moves data from earlier releases' locations into the canonical layout.

    Every step is independent: a failure is recorded in the report and the
    remaining steps still run. Data already present at a canonical location
    always wins over legacy data, which is then discarded. Running twice in a
    row is a no-op the second time.
    """

    def run(self, app_root: Path | str, configuration: Configuration) -> MigrationReport:
        """Migrate every known legacy location under app_root.

        Args:
            app_root: Application root the legacy paths are relative to
            configuration: Loaded configuration supplying the canonical paths

        Returns:
            Report with one StepResult per location examined
        """
        root = Path(app_root).absolute()
        paths = configuration.paths
        report = MigrationReport()

        for location in dotted_legacy_locations(paths):
            report.add(self._migrate(root, location))

        holding = root / LEGACY_HOLDING_DIRNAME
        if holding.is_dir():
            for location in holding_legacy_locations(paths):
                report.add(self._migrate(root, location))
            self._remove_if_empty(holding)

        report.add(self.adopt_legacy_config(root, paths))
        self._remove_settings_dir(root / LEGACY_SETTINGS_DIRNAME)

        deprecated = root / DEPRECATED_INDEX_DIRNAME
        if deprecated.exists():
            discard(deprecated)
            logger.info(f"Removed deprecated index directory {deprecated}")

        if report.failed:
            logger.warning(f"{len(report.failed)} legacy location(s) could not be migrated; will retry on next start")
        return report

    def adopt_legacy_config(self, app_root: Path | str, paths: PathSet) -> StepResult:
        """Move the legacy standalone config file into place.

        Only happens when no canonical config file exists yet.
        """
        legacy = Path(app_root).absolute() / LEGACY_SETTINGS_DIRNAME / LEGACY_CONFIG_FILENAME

        if not legacy.is_file():
            return StepResult(legacy, paths.config_file, StepStatus.SKIPPED)
        if paths.config_file.exists():
            return StepResult(legacy, paths.config_file, StepStatus.SKIPPED, "canonical config already exists")

        try:
            paths.config_file.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(legacy), str(paths.config_file))
        except OSError as e:
            logger.warning(f"Failed to move legacy config {legacy} to {paths.config_file}: {e}")
            return StepResult(legacy, paths.config_file, StepStatus.FAILED, str(e))

        logger.info(f"Moved legacy config {legacy} to {paths.config_file}")
        return StepResult(legacy, paths.config_file, StepStatus.MIGRATED)

    # ===== Private Helpers =====

    def _migrate(self, root: Path, location: LegacyLocation) -> StepResult:
        old = root / location.old
        new = location.new

        if not old.exists():
            return StepResult(old, new, StepStatus.SKIPPED)

        if has_data(new):
            discard(old)
            logger.info(f"Discarded legacy {old}: {new} already holds data")
            return StepResult(old, new, StepStatus.DISCARDED)

        try:
            if location.is_dir:
                self._copy_tree(old, new)
                shutil.rmtree(old)
            else:
                new.parent.mkdir(parents=True, exist_ok=True)
                shutil.move(str(old), str(new))
        except OSError as e:
            logger.warning(f"Failed to migrate {old} to {new}: {e}")
            return StepResult(old, new, StepStatus.FAILED, str(e))

        logger.info(f"Migrated {old} to {new}")
        return StepResult(old, new, StepStatus.MIGRATED)

    def _copy_tree(self, old: Path, new: Path) -> None:
        """Copy old into the empty directory new, leaving new empty on failure.

        A partial copy would count as data on the next run and get the
        legacy directory discarded, so the target is emptied before the
        error propagates.
        """
        new.mkdir(parents=True, exist_ok=True)
        try:
            shutil.copytree(old, new, dirs_exist_ok=True)
        except OSError:
            shutil.rmtree(new, ignore_errors=True)
            new.mkdir(parents=True, exist_ok=True)
            raise

    def _remove_if_empty(self, directory: Path) -> None:
        with suppress(OSError):
            if not any(directory.iterdir()):
                directory.rmdir()
                logger.debug(f"Removed empty legacy directory {directory}")

    def _remove_settings_dir(self, directory: Path) -> None:
        """Remove the legacy settings directory once it holds no data files."""
        if not directory.is_dir():
            return
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            logger.warning(f"Cannot inspect legacy settings directory {directory}: {e}")
            return

        if all(_is_junk(entry) for entry in entries):
            discard(directory)
            logger.info(f"Removed legacy settings directory {directory}")


def _is_junk(path: Path) -> bool:
    return path.is_file() and (path.name.lower() in JUNK_FILENAMES or path.suffix.lower() in JUNK_SUFFIXES)
