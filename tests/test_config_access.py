"""
Tests for ConfigNode and the typed config accessors.
"""
import pytest

from dragon_hatchery.config_access import compute_value, get_section, parse_bool, parse_value
from dragon_hatchery.config_node import ConfigNode
from dragon_hatchery.errors import ConfigError, ConfigErrorReason


def make_root():
    return ConfigNode({
        "key": 12,
        "flag": True,
        "section": {
            "inner": {"value": "abc"},
            "number": 1.5,
        },
    })


class TestConfigNode:
    """Test the read-only config tree."""

    def test_root_path_is_empty(self):
        """Should have an empty path at the root."""
        root = make_root()
        assert root.current_path == ""
        assert root.name == ""

    def test_nested_path(self):
        """Should carry the full path into nested nodes."""
        node = make_root().get_node("section.inner")
        assert node is not None
        assert node.current_path == "section.inner"
        assert node.name == "inner"

    def test_scalars_are_text(self):
        """Should expose scalars as text."""
        root = make_root()
        assert root.get_string("key") == "12"
        assert root.get_string("flag") == "true"
        assert root.get_string("section.number") == "1.5"

    def test_section_is_not_a_scalar(self):
        """Should not read a subtree as a string."""
        assert make_root().get_string("section") is None

    def test_scalar_is_not_a_section(self):
        """Should not read a scalar as a node."""
        assert make_root().get_node("key") is None

    def test_absent(self):
        """Should return None for absent keys."""
        root = make_root()
        assert root.get_string("nope") is None
        assert root.get_node("nope") is None
        assert "nope" not in root
        assert "section.inner.value" in root

    def test_keys_in_order(self):
        """Should keep document order."""
        assert make_root().keys() == ["key", "flag", "section"]

    def test_non_string_keys(self):
        """Should match integer YAML keys by text."""
        root = ConfigNode({"blocks": {1: {"weight": 2}}})
        assert root.get_node("blocks").keys() == ["1"]
        assert root.get_node("blocks.1").current_path == "blocks.1"
        assert root.get_string("blocks.1.weight") == "2"

    def test_flow_list_renders_as_brackets(self):
        """Should render flow lists in bracketed form."""
        root = ConfigNode({"data": ["facing=north", "waterlogged=true"], "flags": [True, 1]})
        assert root.get_string("data") == "[facing=north, waterlogged=true]"
        assert root.get_string("flags") == "[true, 1]"
        assert ConfigNode({"empty": []}).get_string("empty") == "[]"


class TestGetSection:
    """Test get_section."""

    def test_valid(self):
        """Should return an existing section."""
        section = get_section(make_root(), "section")
        assert section.current_path == "section"

    def test_missing(self):
        """Should fail with MISSING for an absent section."""
        with pytest.raises(ConfigError) as info:
            get_section(make_root(), "missing")
        assert info.value.reason == ConfigErrorReason.MISSING
        assert info.value.path == "missing"

    def test_not_a_section(self):
        """Should fail with MISSING for a scalar."""
        with pytest.raises(ConfigError) as info:
            get_section(make_root(), "key")
        assert info.value.reason == ConfigErrorReason.MISSING

    def test_path_is_root_relative(self):
        """Should report paths relative to the document root."""
        section = get_section(make_root(), "section")
        with pytest.raises(ConfigError) as info:
            get_section(section, "other")
        assert info.value.path == "section.other"


class TestParseValue:
    """Test parse_value."""

    def test_valid(self):
        """Should return the parsed value."""
        assert parse_value(make_root(), "key", int) == 12

    def test_missing(self):
        """Should fail with MISSING for an absent value."""
        with pytest.raises(ConfigError) as info:
            parse_value(make_root(), "missing", int)
        assert info.value.reason == ConfigErrorReason.MISSING
        assert info.value.short_message == "Missing value"

    def test_parser_returns_none(self):
        """Should treat a None result as a parse failure."""
        with pytest.raises(ConfigError) as info:
            parse_value(make_root(), "key", lambda raw: None)
        assert info.value.reason == ConfigErrorReason.PARSE_FAILURE

    def test_parser_returns_empty_string(self):
        """Should treat an empty string result as a parse failure."""
        with pytest.raises(ConfigError) as info:
            parse_value(make_root(), "key", lambda raw: "")
        assert info.value.reason == ConfigErrorReason.PARSE_FAILURE

    def test_parser_raises(self):
        """Should wrap parser errors with path, raw value and cause."""
        section = get_section(make_root(), "section.inner")
        with pytest.raises(ConfigError) as info:
            parse_value(section, "value", int)
        error = info.value
        assert error.reason == ConfigErrorReason.PARSE_FAILURE
        assert error.path == "section.inner.value"
        assert error.raw == "abc"
        assert "abc" in error.short_message
        assert isinstance(error.cause, ValueError)
        assert error.__cause__ is error.cause

    def test_falsy_result_is_accepted(self):
        """Should accept falsy results other than None and ""."""
        root = ConfigNode({"zero": 0, "off": False})
        assert parse_value(root, "zero", float) == 0.0
        assert parse_value(root, "off", parse_bool) is False

    def test_message_includes_location(self):
        """Should put the location into the message."""
        with pytest.raises(ConfigError) as info:
            parse_value(make_root(), "missing", int)
        assert str(info.value) == "Invalid configuration! Missing value; location: missing"


class TestComputeValue:
    """Test compute_value."""

    def test_valid(self):
        """Should return the computed value."""
        result = compute_value(make_root(), "section", lambda node, key: node.get_node(key).keys())
        assert result == ["inner", "number"]

    def test_returns_none(self):
        """Should treat a None result as a compute failure."""
        with pytest.raises(ConfigError) as info:
            compute_value(make_root(), "section", lambda node, key: None)
        assert info.value.reason == ConfigErrorReason.COMPUTE_FAILURE
        assert info.value.path == "section"

    def test_raises(self):
        """Should wrap computer errors as a compute failure."""
        def fail(node, key):
            raise RuntimeError("boom")

        with pytest.raises(ConfigError) as info:
            compute_value(make_root(), "anything", fail)
        assert info.value.reason == ConfigErrorReason.COMPUTE_FAILURE
        assert "boom" in info.value.describe()


class TestParseBool:
    """Test the strict boolean parser."""

    def test_accepts_true_false(self):
        """Should accept true and false in any case."""
        assert parse_bool("true") is True
        assert parse_bool("FALSE") is False

    def test_rejects_other(self):
        """Should reject anything else."""
        with pytest.raises(ValueError):
            parse_bool("yes")
