"""Factory defaults for the user-editable configuration sections."""

from types import MappingProxyType

EDITABLE_SECTIONS = ("Api", "UI", "Cache", "Export")

DEFAULTS = MappingProxyType(
    {
        "Api": MappingProxyType(
            {
                "FetchTimeoutSeconds": 180,
                "MaxPaginationPages": 100,
                "RequestDelayMs": 100,
            }
        ),
        "UI": MappingProxyType(
            {
                "SearchDebounceMs": 300,
                "SelectionPollMs": 250,
                "SidebarWidth": 180,
                "RememberWindowState": True,
                "RememberSidebarState": True,
                "Theme": "dark",
            }
        ),
        "Cache": MappingProxyType(
            {
                "Enabled": True,
                "MetadataCacheEnabled": True,
                "IndexCacheEnabled": True,
                "MaxCacheAgeDays": 7,
                "MaxIndexedChats": 500,
            }
        ),
        "Export": MappingProxyType(
            {
                "DefaultFormat": "json",
                "IncludeTimestamps": True,
                "PrettyPrint": True,
            }
        ),
    }
)
