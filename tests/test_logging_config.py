"""Tests for logging configuration."""

import json
import logging

import pytest

from updater_additions._settings import InMemorySettingsBackend, SettingsStore
from updater_additions.logging_config import (
    StructuredFormatter,
    logger,
    resolve_level,
    set_log_level,
    setup_logging,
)


def _record(message="hello %s", args=("world",), **extra):
    record = logging.LogRecord("updater_additions", logging.WARNING, __file__, 1, message, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLoggingConfig:
    def test_package_logger(self):
        assert logger.name == "updater_additions"
        assert logger.handlers

    def test_setup_is_idempotent(self):
        handlers = list(logger.handlers)
        assert setup_logging() is logger
        assert logger.handlers == handlers

    def test_set_log_level(self):
        original = logger.level
        try:
            set_log_level("debug")
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(original)

    @pytest.mark.parametrize(
        "name,expected",
        [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("chatty", logging.INFO), ("", logging.INFO)],
    )
    def test_resolve_level(self, name, expected):
        assert resolve_level(name) == expected


class TestStructuredFormatter:
    def test_basic_fields(self):
        entry = json.loads(StructuredFormatter().format(_record()))

        assert entry["level"] == "WARNING"
        assert entry["logger"] == "updater_additions"
        assert entry["message"] == "hello world"
        assert "timestamp" in entry
        assert "slug" not in entry

    def test_addition_context_fields(self):
        record = _record("Added", (), slug="my-theme", addition_type="github_theme", unrelated="x")

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["slug"] == "my-theme"
        assert entry["addition_type"] == "github_theme"
        assert "unrelated" not in entry

    def test_submission_logs_carry_context(self, caplog):
        store = SettingsStore(InMemorySettingsBackend())

        with caplog.at_level(logging.INFO, logger="updater_additions"):
            record = store.submit_addition(
                {"type": "github_theme", "slug": "my-theme", "uri": "https://github.com/me/my-theme"}
            )

        added = [r for r in caplog.records if r.getMessage().startswith("Added")]
        assert len(added) == 1
        assert added[0].slug == "my-theme"
        assert added[0].addition_id == record.id
