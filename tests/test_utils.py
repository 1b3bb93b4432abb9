"""Tests for utility functions."""

from types import MappingProxyType

from chatdesk_config.defaults import DEFAULTS
from chatdesk_config.utils import NOT_FOUND
from chatdesk_config.utils import deep_clone
from chatdesk_config.utils import deep_merge
from chatdesk_config.utils import get_by_path


class TestDeepMerge:
    """Test deep_merge function."""

    def test_empty_dicts(self):
        """Test merging empty dictionaries."""
        assert deep_merge({}, {}) == {}

    def test_empty_overlay_keeps_every_base_key(self):
        """Test merging with empty overlay."""
        assert deep_merge(DEFAULTS, {}) == deep_clone(DEFAULTS)

    def test_disjoint_keys_are_added(self):
        """Test overlay-only keys are added next to base keys."""
        base = {"Api": {"RequestDelayMs": 100}}
        overlay = {"Plugins": {"Enabled": False}}
        assert deep_merge(base, overlay) == {"Api": {"RequestDelayMs": 100}, "Plugins": {"Enabled": False}}

    def test_partial_section_override(self):
        """Test a partially overlapping section keeps unspecified defaults."""
        result = deep_merge(DEFAULTS, {"UI": {"Theme": "light"}})
        assert result["UI"]["Theme"] == "light"
        assert result["UI"]["SidebarWidth"] == 180
        assert result["Cache"] == dict(DEFAULTS["Cache"])

    def test_deep_nested_merge(self):
        """Test merging deeply nested dictionaries."""
        base = {"level1": {"level2": {"level3": {"a": 1, "b": 2}}}}
        overlay = {"level1": {"level2": {"level3": {"b": 20, "c": 3}}}}
        result = deep_merge(base, overlay)
        expected = {"level1": {"level2": {"level3": {"a": 1, "b": 20, "c": 3}}}}
        assert result == expected

    def test_overlay_replaces_non_dict(self):
        """Test overlay replaces a scalar with a mapping."""
        base = {"UI": {"Theme": "dark"}}
        overlay = {"UI": {"Theme": {"Name": "solarized"}}}
        assert deep_merge(base, overlay) == {"UI": {"Theme": {"Name": "solarized"}}}

    def test_type_change_is_not_validated(self):
        """Test a scalar of a different type replaces the base value."""
        base = {"UI": {"SidebarWidth": 180}}
        overlay = {"UI": {"SidebarWidth": "wide"}}
        assert deep_merge(base, overlay) == {"UI": {"SidebarWidth": "wide"}}

    def test_dict_replaced_by_non_dict(self):
        """Test a mapping in base is replaced by a scalar in overlay."""
        assert deep_merge({"UI": {"Theme": "dark"}}, {"UI": None}) == {"UI": None}

    def test_originals_not_modified(self):
        """Test that original dicts are not modified."""
        base = {"a": {"b": 1}}
        overlay = {"a": {"c": 2}, "d": {"e": 3}}
        result = deep_merge(base, overlay)

        assert result == {"a": {"b": 1, "c": 2}, "d": {"e": 3}}
        assert base == {"a": {"b": 1}}
        assert overlay == {"a": {"c": 2}, "d": {"e": 3}}

    def test_result_shares_no_nested_mapping(self):
        """Test mutating the result leaves both inputs alone."""
        base = {"a": {"b": 1}, "untouched": {"x": 1}}
        overlay = {"new": {"y": 2}}
        result = deep_merge(base, overlay)

        result["untouched"]["x"] = 99
        result["new"]["y"] = 99

        assert base["untouched"]["x"] == 1
        assert overlay["new"]["y"] == 2

    def test_merge_accepts_read_only_defaults(self):
        """Test the read-only defaults table merges into plain dicts."""
        result = deep_merge(DEFAULTS, {"Export": {"PrettyPrint": False}})
        assert isinstance(result, dict)
        assert isinstance(result["Export"], dict)
        assert result["Export"]["PrettyPrint"] is False


class TestDeepClone:
    """Test deep_clone function."""

    def test_clone_equals_source(self):
        assert deep_clone(DEFAULTS) == {section: dict(values) for section, values in DEFAULTS.items()}

    def test_clone_is_independent(self):
        source = {"UI": {"Theme": "dark"}}
        clone = deep_clone(source)
        clone["UI"]["Theme"] = "light"
        clone["Extra"] = {}

        assert source == {"UI": {"Theme": "dark"}}

    def test_clone_of_read_only_mapping_is_mutable(self):
        clone = deep_clone(MappingProxyType({"a": MappingProxyType({"b": 1})}))
        clone["a"]["b"] = 2
        assert clone == {"a": {"b": 2}}

    def test_repeated_clones_do_not_contaminate(self):
        first = deep_clone(DEFAULTS)
        first["Cache"]["MaxIndexedChats"] = 1
        second = deep_clone(DEFAULTS)
        assert second["Cache"]["MaxIndexedChats"] == 500


class TestGetByPath:
    """Test get_by_path function."""

    def test_resolves_nested_value(self):
        assert get_by_path(DEFAULTS, "Cache.MaxIndexedChats") == 500

    def test_resolves_section(self):
        assert get_by_path({"UI": {"Theme": "dark"}}, "UI") == {"Theme": "dark"}

    def test_missing_section(self):
        assert get_by_path(DEFAULTS, "Nonexistent.Key") is NOT_FOUND

    def test_missing_key(self):
        assert get_by_path(DEFAULTS, "UI.Nope") is NOT_FOUND

    def test_descending_through_scalar(self):
        assert get_by_path(DEFAULTS, "UI.Theme.Color") is NOT_FOUND

    def test_empty_path(self):
        assert get_by_path(DEFAULTS, "") is NOT_FOUND

    def test_false_value_is_not_confused_with_miss(self):
        value = get_by_path({"Cache": {"Enabled": False}}, "Cache.Enabled")
        assert value is False
        assert value is not NOT_FOUND

    def test_sentinel_is_falsy(self):
        assert not NOT_FOUND
        assert repr(NOT_FOUND) == "NOT_FOUND"
