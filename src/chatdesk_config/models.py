"""Data models for chatdesk-config."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from dataclasses import fields
from enum import Enum
from pathlib import Path
from typing import Any
from typing import ClassVar

from .defaults import DEFAULTS
from .exceptions import ConfigValidationError
from .utils import get_by_path

logger = logging.getLogger(__name__)


class LoadStatus(Enum):
    """How the configuration file was resolved during load.

    CREATED means the file was absent and defaults were used; the first-run
    save may still have failed, in which case a warning was logged and the
    next load reports CREATED again. LOADED means the file was read and
    merged. MALFORMED means the file could not be parsed and defaults were
    used with the file left untouched.
    """

    CREATED = "created"
    LOADED = "loaded"
    MALFORMED = "malformed"


class StepStatus(Enum):
    """Outcome of a single legacy migration step."""

    MIGRATED = "migrated"
    DISCARDED = "discarded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class PathSet:
    """Canonical locations of the application's on-disk state.

    Attributes:
        app_data: Directory holding everything below
        config_file: User-editable JSON settings
        cache_dir: Metadata and index cache
        webview_dir: Browser-engine profile data (opaque)
        credentials_file: Encrypted credential blob (opaque)
        window_state_file: Saved window geometry (opaque)
    """

    app_data: Path
    config_file: Path
    cache_dir: Path
    webview_dir: Path
    credentials_file: Path
    window_state_file: Path

    def to_dict(self) -> dict[str, str]:
        """Paths as strings, keyed as in the Paths lookup section."""
        return {
            "AppData": str(self.app_data),
            "ConfigFile": str(self.config_file),
            "CacheDir": str(self.cache_dir),
            "WebViewDir": str(self.webview_dir),
            "CredentialsFile": str(self.credentials_file),
            "WindowStateFile": str(self.window_state_file),
        }


def _file_key(attribute: str) -> str:
    """Map a snake_case attribute to its key in the config file."""
    return "".join(part.capitalize() for part in attribute.split("_"))


def _check_type(section: str, key: str, value: Any, default: Any) -> Any:
    expected = type(default)
    if expected is bool:
        valid = isinstance(value, bool)
    elif expected is int:
        valid = isinstance(value, int) and not isinstance(value, bool)
    else:
        valid = isinstance(value, expected)

    if not valid:
        raise ConfigValidationError(
            f"{section}.{key} expects {expected.__name__}, got {type(value).__name__}: {value!r}"
        )
    return value


class _Section:
    """Shared conversion between a typed section and its raw mapping."""

    SECTION: ClassVar[str]

    @classmethod
    def from_mapping(cls, values: Any):
        """Build the section from raw values, falling back to factory defaults.

        Missing keys and values of the wrong type take the default. Keys the
        section does not know are ignored.
        """
        defaults = DEFAULTS[cls.SECTION]
        if not isinstance(values, Mapping):
            values = {}

        kwargs = {}
        for f in fields(cls):
            key = _file_key(f.name)
            default = defaults[key]
            try:
                kwargs[f.name] = _check_type(cls.SECTION, key, values.get(key, default), default)
            except ConfigValidationError as e:
                logger.warning(f"{e} - using default {default!r}")
                kwargs[f.name] = default
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Section values keyed as in the config file."""
        return {_file_key(f.name): getattr(self, f.name) for f in fields(self)}


@dataclass
class ApiSettings(_Section):
    SECTION: ClassVar[str] = "Api"

    fetch_timeout_seconds: int
    max_pagination_pages: int
    request_delay_ms: int


@dataclass
class UISettings(_Section):
    SECTION: ClassVar[str] = "UI"

    search_debounce_ms: int
    selection_poll_ms: int
    sidebar_width: int
    remember_window_state: bool
    remember_sidebar_state: bool
    theme: str


@dataclass
class CacheSettings(_Section):
    SECTION: ClassVar[str] = "Cache"

    enabled: bool
    metadata_cache_enabled: bool
    index_cache_enabled: bool
    max_cache_age_days: int
    max_indexed_chats: int


@dataclass
class ExportSettings(_Section):
    SECTION: ClassVar[str] = "Export"

    default_format: str
    include_timestamps: bool
    pretty_print: bool


@dataclass
class Settings:
    """The four user-editable sections."""

    api: ApiSettings
    ui: UISettings
    cache: CacheSettings
    export: ExportSettings

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Settings":
        return cls(
            api=ApiSettings.from_mapping(raw.get(ApiSettings.SECTION)),
            ui=UISettings.from_mapping(raw.get(UISettings.SECTION)),
            cache=CacheSettings.from_mapping(raw.get(CacheSettings.SECTION)),
            export=ExportSettings.from_mapping(raw.get(ExportSettings.SECTION)),
        )

    @classmethod
    def defaults(cls) -> "Settings":
        return cls.from_mapping(DEFAULTS)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """The editable sections in config file layout."""
        return {
            ApiSettings.SECTION: self.api.to_dict(),
            UISettings.SECTION: self.ui.to_dict(),
            CacheSettings.SECTION: self.cache.to_dict(),
            ExportSettings.SECTION: self.export.to_dict(),
        }


@dataclass(frozen=True)
class LegacyLocation:
    """A path used by an earlier release and where its data belongs now.

    Attributes:
        old: Location relative to the application root
        new: Canonical absolute location
        is_dir: Whether the item is a directory
    """

    old: str
    new: Path
    is_dir: bool


@dataclass(frozen=True)
class StepResult:
    """Outcome of migrating one legacy location.

    Attributes:
        source: Legacy location examined
        target: Canonical location it belongs to
        status: What happened to it
        reason: Error text for FAILED steps, or why a step was skipped
    """

    source: Path
    target: Path | None
    status: StepStatus
    reason: str | None = None


@dataclass
class MigrationReport:
    """Per-step outcomes of one legacy migration run.

    Attributes:
        steps: One StepResult per location examined, in processing order
    """

    steps: list[StepResult] = field(default_factory=list)

    def add(self, result: StepResult) -> StepResult:
        self.steps.append(result)
        return result

    def with_status(self, status: StepStatus) -> list[StepResult]:
        return [step for step in self.steps if step.status is status]

    @property
    def failed(self) -> list[StepResult]:
        return self.with_status(StepStatus.FAILED)

    @property
    def changed(self) -> bool:
        """True if any step moved or discarded data."""
        return any(step.status in (StepStatus.MIGRATED, StepStatus.DISCARDED) for step in self.steps)


@dataclass
class Configuration:
    """Resolved configuration for one application session.

    Built once at startup by ConfigStore.load() and passed to the components
    that need it. The Paths section is derived from the application root and
    never persisted.

    Attributes:
        settings: The four editable sections
        paths: Canonical locations for the application root
        status: How the config file was resolved
        migration_report: Outcome of the legacy migration run at load
    """

    settings: Settings
    paths: PathSet
    status: LoadStatus = LoadStatus.LOADED
    migration_report: MigrationReport | None = None

    @property
    def api(self) -> ApiSettings:
        return self.settings.api

    @property
    def ui(self) -> UISettings:
        return self.settings.ui

    @property
    def cache(self) -> CacheSettings:
        return self.settings.cache

    @property
    def export(self) -> ExportSettings:
        return self.settings.export

    def to_dict(self) -> dict[str, Any]:
        """Editable sections plus the computed Paths section."""
        data: dict[str, Any] = self.settings.to_dict()
        data["Paths"] = self.paths.to_dict()
        return data

    def get_value(self, dotted_path: str) -> Any:
        """Look up a value by dotted path such as "UI.SidebarWidth".

        Returns:
            The value, or NOT_FOUND when the path does not resolve
        """
        return get_by_path(self.to_dict(), dotted_path)


@dataclass(frozen=True)
class RemovalItem:
    """Something on disk the uninstall plan will delete.

    Attributes:
        path: File or directory to remove
        label: Human-readable description for the report
        size_bytes: Size for display only (None when not measured)
    """

    path: Path
    label: str
    size_bytes: int | None = None


@dataclass(frozen=True)
class RemovalResult:
    """Outcome of removing one planned item.

    Attributes:
        item: The planned item
        removed: Whether removal succeeded
        error: Error text when it did not
    """

    item: RemovalItem
    removed: bool
    error: str | None = None
