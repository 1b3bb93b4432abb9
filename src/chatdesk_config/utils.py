"""Utility functions for chatdesk-config."""

from collections.abc import Mapping
from typing import Any


class _NotFound:
    """Marker returned by dotted-path lookups that miss."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = _NotFound()


def deep_clone(source: Mapping[str, Any]) -> dict[str, Any]:
    """Deep copy a nested mapping into plain dictionaries.

    Read-only mappings (such as the factory defaults) come back as ordinary
    dicts, so the clone can be edited without touching the source.

    Args:
        source: Mapping to copy

    Returns:
        New dictionary sharing no nested mapping with source
    """
    result = {}
    for key, value in source.items():
        if isinstance(value, Mapping):
            result[key] = deep_clone(value)
        elif isinstance(value, list):
            result[key] = list(value)
        else:
            result[key] = value
    return result


def deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries with overlay precedence.

    Recursively merges nested dictionaries. Non-dict values in overlay
    completely replace corresponding values in base, even when the type
    differs.

    Args:
        base: Base dictionary
        overlay: Overlay dictionary (takes precedence)

    Returns:
        New merged dictionary (base and overlay are not modified)

    Examples:
        >>> base = {"a": 1, "b": {"c": 2, "d": 3}}
        >>> overlay = {"b": {"c": 20}, "e": 5}
        >>> deep_merge(base, overlay)
        {'a': 1, 'b': {'c': 20, 'd': 3}, 'e': 5}

        >>> deep_merge({"UI": {"Theme": "dark"}}, {"UI": "broken"})
        {'UI': 'broken'}
    """
    result = deep_clone(base)

    for key, value in overlay.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            # Both base and overlay have a mapping at this key - recurse
            result[key] = deep_merge(result[key], value)
        elif isinstance(value, Mapping):
            result[key] = deep_clone(value)
        else:
            # Overlay wins - replace completely
            result[key] = value

    return result


def get_by_path(data: Mapping[str, Any], dotted_path: str) -> Any:
    """Resolve a dot-separated key path against a nested mapping.

    Args:
        data: Nested mapping to search
        dotted_path: Key path such as "UI.SidebarWidth"

    Returns:
        The resolved value, or NOT_FOUND if any segment is missing or an
        intermediate value is not a mapping

    Examples:
        >>> get_by_path({"UI": {"Theme": "dark"}}, "UI.Theme")
        'dark'

        >>> get_by_path({"UI": {"Theme": "dark"}}, "UI.Theme.Color")
        NOT_FOUND
    """
    if not isinstance(dotted_path, str) or not dotted_path:
        return NOT_FOUND

    current: Any = data
    for segment in dotted_path.split("."):
        if not isinstance(current, Mapping) or segment not in current:
            return NOT_FOUND
        current = current[segment]
    return current
