"""Inventory and removal of everything the application stores on disk.

Used by the ``chatdesk-uninstall`` maintenance tool. The scan is read-only;
removal only happens through ``execute`` once the caller has confirmed.
"""

import argparse
import logging
import os
import shutil
import sys
from pathlib import Path

from .models import RemovalItem
from .models import RemovalResult
from .paths import LEGACY_HOLDING_DIRNAME
from .paths import LEGACY_SETTINGS_DIRNAME
from .paths import build_path_layout
from .paths import dotted_legacy_locations
from .paths import legacy_user_data_dir

logger = logging.getLogger(__name__)


def directory_size(path: Path) -> int | None:
    """Total size in bytes of the files under path, or None if unreadable."""
    total = 0
    try:
        for dirpath, _dirnames, filenames in os.walk(path, onerror=_raise):
            for name in filenames:
                entry = Path(dirpath) / name
                if not entry.is_symlink():
                    total += entry.stat().st_size
    except OSError as e:
        logger.debug(f"Could not measure {path}: {e}")
        return None
    return total


def file_size(path: Path) -> int | None:
    try:
        return path.stat().st_size
    except OSError:
        return None


def _raise(error: OSError) -> None:
    raise error


def format_size(size: int | None) -> str:
    if size is None:
        return "size unknown"
    value = float(size)
    if value < 1024:
        return f"{size} B"
    for unit in ("KB", "MB", "GB"):
        value /= 1024
        if value < 1024 or unit == "GB":
            break
    return f"{value:.1f} {unit}"


class UninstallInventory:
    """Finds and removes application data, current and legacy.

    Args:
        app_root: Directory the application is installed in
        legacy_data_dir: Per-user directory of the earliest release
            (default: resolved through platformdirs)
    """

    def __init__(self, app_root: Path | str, legacy_data_dir: Path | None = None):
        self.app_root = Path(app_root).absolute()
        self.paths = build_path_layout(self.app_root)
        self.legacy_data_dir = legacy_data_dir if legacy_data_dir is not None else legacy_user_data_dir()

    def scan(self, include_config: bool = False, measure: bool = True) -> list[RemovalItem]:
        """Build the removal plan.

        Order: current runtime data, the config file (only with
        include_config), then every legacy location.

        Args:
            include_config: Also remove the user's config file
            measure: Compute directory sizes for display

        Returns:
            Items that exist on disk, in removal order
        """
        candidates = [
            (self.paths.cache_dir, "Cache"),
            (self.paths.webview_dir, "Browser engine data"),
            (self.paths.credentials_file, "Credentials"),
            (self.paths.window_state_file, "Window state"),
        ]
        if include_config:
            candidates.append((self.paths.config_file, "Configuration file"))

        for location in dotted_legacy_locations(self.paths):
            candidates.append((self.app_root / location.old, f"Legacy {location.old}"))
        candidates.extend(
            [
                (self.app_root / LEGACY_HOLDING_DIRNAME, "Legacy data directory"),
                (self.app_root / LEGACY_SETTINGS_DIRNAME, "Legacy settings directory"),
                (self.legacy_data_dir, "Legacy per-user data"),
            ]
        )

        plan = []
        for path, label in candidates:
            if not path.exists():
                logger.debug(f"Not present: {label} ({path})")
                continue
            size = None
            if measure:
                size = directory_size(path) if path.is_dir() else file_size(path)
            plan.append(RemovalItem(path, label, size))
        return plan

    def execute(self, plan: list[RemovalItem]) -> list[RemovalResult]:
        """Remove every item in the plan.

        Each item is attempted regardless of earlier failures. Nothing is
        rolled back.

        Args:
            plan: Items returned by scan()

        Returns:
            One RemovalResult per item
        """
        results = []
        for item in plan:
            try:
                if item.path.is_dir() and not item.path.is_symlink():
                    shutil.rmtree(item.path)
                else:
                    item.path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Failed to remove {item.label} at {item.path}: {e}")
                results.append(RemovalResult(item, False, str(e)))
                continue
            logger.info(f"Removed {item.label} at {item.path}")
            results.append(RemovalResult(item, True))
        return results


# ===== Command Line =====


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chatdesk-uninstall",
        description="Remove ChatDesk application data, including data left by earlier releases.",
    )
    parser.add_argument(
        "--app-root",
        type=Path,
        default=Path.cwd(),
        help="Application install directory (default: current directory)",
    )
    parser.add_argument("-f", "--force", action="store_true", help="Remove without asking for confirmation")
    parser.add_argument(
        "--include-config",
        action="store_true",
        help="Also remove the user configuration file",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    inventory = UninstallInventory(args.app_root)
    plan = inventory.scan(include_config=args.include_config)

    if not plan:
        print("Nothing to remove.")
        return 0

    print("The following will be removed:")
    for item in plan:
        print(f"  {item.label}: {item.path} ({format_size(item.size_bytes)})")
    if not args.include_config and inventory.paths.config_file.exists():
        print(f"  (keeping {inventory.paths.config_file}; use --include-config to remove it)")

    if not args.force:
        try:
            answer = input("Proceed? [y/N] ")
        except EOFError:
            answer = ""
        if answer.strip().lower() not in ("y", "yes"):
            print("Aborted, nothing removed.")
            return 0

    results = inventory.execute(plan)
    for result in results:
        if result.removed:
            print(f"  removed  {result.item.path}")
        else:
            print(f"  FAILED   {result.item.path}: {result.error}")

    failures = sum(1 for result in results if not result.removed)
    if failures:
        print(f"{failures} of {len(results)} item(s) could not be removed.")
        return 1
    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
