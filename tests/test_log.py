"""Tests for logging setup."""

import json

import structlog

from preview_bot.log import get_logger, setup_logging


def teardown_function():
    structlog.reset_defaults()


def test_json_format_emits_json_lines(capsys):
    setup_logging("INFO", "json")

    get_logger("test").info("preview_sent", message_id="1")

    record = json.loads(capsys.readouterr().err.strip())
    assert record["event"] == "preview_sent"
    assert record["level"] == "info"
    assert record["message_id"] == "1"


def test_level_filters_debug(capsys):
    setup_logging("INFO")

    get_logger("test").debug("preview_fetch_failed")

    assert capsys.readouterr().err == ""
