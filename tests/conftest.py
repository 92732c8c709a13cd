"""Pytest configuration and shared fixtures for all tests."""

import pytest

PLUGIN_FILE = """<?php
/**
 * Plugin Name: My Plugin
 * Plugin URI:  https://example.com/my-plugin
 * Version:     1.2.0
 * Author:      Jane Doe
 * Description: Does useful things */
"""

THEME_STYLESHEET = """/*
Theme Name: My Theme
Version: 2.0
Author: Theme Co
Tags: blog, two-columns
*/

body { margin: 0; }
"""


@pytest.fixture(autouse=True)
def disable_sentry_for_tests(monkeypatch):
    """Disable Sentry telemetry for all tests.

    Tests exercising initialize_sentry() set TELEMETRY themselves.
    """
    monkeypatch.setenv("TELEMETRY", "false")
    monkeypatch.delenv("SENTRY_DSN", raising=False)


@pytest.fixture(autouse=True)
def isolate_config_env(monkeypatch):
    """Keep the developer's environment out of configuration tests."""
    for name in ("ADDITIONS_SETTINGS_FILE", "WP_PLUGIN_DIR", "WP_THEME_ROOT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def wp_content(tmp_path):
    """Create a wp-content tree with one installed plugin and one installed theme."""
    plugin_dir = tmp_path / "plugins"
    theme_root = tmp_path / "themes"

    (plugin_dir / "my-plugin").mkdir(parents=True)
    (plugin_dir / "my-plugin" / "my-plugin.php").write_text(PLUGIN_FILE, encoding="utf-8")

    (theme_root / "my-theme").mkdir(parents=True)
    (theme_root / "my-theme" / "style.css").write_text(THEME_STYLESHEET, encoding="utf-8")

    return {"plugin_dir": plugin_dir, "theme_root": theme_root}
