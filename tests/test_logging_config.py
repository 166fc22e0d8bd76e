"""
Tests for logging configuration.
"""
import json
import logging
import os
import tempfile

import pytest

from dragon_hatchery.logging_config import (
    HumanFormatter,
    JSONFormatter,
    configure_logging,
    is_debug_logging,
    set_debug_logging,
)


def make_record(msg="hello", level=logging.ERROR, **extra):
    record = logging.LogRecord("dragon_hatchery.registry", level, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def isolated_logging():
    root = logging.getLogger()
    package = logging.getLogger("dragon_hatchery")
    saved = (list(root.handlers), root.level, package.level)
    yield
    for handler in root.handlers:
        if handler not in saved[0]:
            handler.close()
    root.handlers = saved[0]
    root.setLevel(saved[1])
    package.setLevel(saved[2])


class TestJSONFormatter:
    """Test JSON output."""

    def test_basic_fields(self):
        """Should emit the basic fields."""
        data = json.loads(JSONFormatter().format(make_record()))
        assert data["level"] == "ERROR"
        assert data["logger"] == "dragon_hatchery.registry"
        assert data["message"] == "hello"

    def test_structured_fields(self):
        """Should include structured extra fields."""
        record = make_record(scenario="first", config_path="scenario.first.weight", reason="parse_failure")
        data = json.loads(JSONFormatter().format(record))
        assert data["scenario"] == "first"
        assert data["config_path"] == "scenario.first.weight"
        assert data["reason"] == "parse_failure"


class TestHumanFormatter:
    """Test console output."""

    def test_contains_message_and_scenario(self):
        """Should include the message and scenario."""
        line = HumanFormatter(use_colors=False).format(make_record(scenario="first"))
        assert "ERRO" in line
        assert "[registry]" in line
        assert "scenario=first" in line
        assert line.endswith("hello")


class TestConfigureLogging:
    """Test handler setup."""

    def test_writes_files(self, isolated_logging):
        """Should write human and JSON log files."""
        with tempfile.TemporaryDirectory() as d:
            configure_logging(level="DEBUG", log_dir=d)
            logging.getLogger("dragon_hatchery.test").warning("written")
            for handler in logging.getLogger().handlers:
                handler.flush()

            assert os.path.exists(os.path.join(d, "hatchery.log"))
            with open(os.path.join(d, "hatchery.json.log"), encoding="utf-8") as f:
                lines = [json.loads(line) for line in f if line.strip()]
            assert any(line["message"] == "written" for line in lines)

            for handler in logging.getLogger().handlers:
                handler.close()

    def test_debug_toggle(self, isolated_logging):
        """Should toggle debug logging."""
        set_debug_logging(True)
        assert is_debug_logging()
        set_debug_logging(False)
        assert not is_debug_logging()
