"""Tests for logging configuration."""

from __future__ import annotations

import io

import orjson
import pytest
import structlog

from cabinetry.logging_setup import CONFIGS, configure_for, configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_structlog():
    """Put the suite's capture configuration back after each test."""
    saved = structlog.get_config()
    yield
    structlog.configure(**saved)


def test_presets():
    assert set(CONFIGS) == {"development", "production", "testing", "server"}
    assert CONFIGS["production"]["enable_json"]
    assert CONFIGS["testing"]["level"] == "WARNING"


def test_unknown_preset():
    with pytest.raises(KeyError):
        configure_for("staging")


def test_json_output():
    stream = io.StringIO()
    configure_logging(level="INFO", enable_json=True, stream=stream)

    get_logger("cabinetry.test").info("Built box skeleton", parts=5)

    record = orjson.loads(stream.getvalue().strip())
    assert record["event"] == "Built box skeleton"
    assert record["parts"] == 5
    assert record["level"] == "info"
    assert "timestamp" in record


def test_level_filtering():
    stream = io.StringIO()
    configure_for("testing", stream=stream)

    logger = get_logger("cabinetry.test")
    logger.info("hidden")
    logger.warning("shown")

    output = stream.getvalue()
    assert "hidden" not in output
    assert "shown" in output


def test_extra_processors():
    stream = io.StringIO()

    def add_tool(_, __, event_dict):
        event_dict["tool"] = "cabinetry"
        return event_dict

    configure_logging(enable_json=True, extra_processors=[add_tool], stream=stream)
    get_logger("cabinetry.test").info("hello")

    assert orjson.loads(stream.getvalue().strip())["tool"] == "cabinetry"
