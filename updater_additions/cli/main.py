"""Command-line interface for managing updater additions.

# Configuration
The tool can be configured via CLI options or environment variables
(CLI options take precedence):
- ADDITIONS_SETTINGS_FILE: JSON settings document (default: updater-additions.json)
- WP_PLUGIN_DIR: Directory holding installed plugins
- WP_THEME_ROOT: Directory holding installed themes
- LOG_LEVEL / LOG_FORMAT: Logging level and "json" for structured logs
- TELEMETRY / SENTRY_DSN: Opt-in error reporting

Concurrent `add` runs against one settings file serialize through a
sibling "<settings file>.lock"; a lock left behind by a killed process must
be removed by hand.
"""

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click
import sentry_sdk

from .. import __version__
from .._additions import AdditionsRegistry, create_default_registry
from .._settings import DEFAULT_OPTION_NAME, JsonFileSettingsBackend, SettingsStore, SubmissionResult
from ..console import (
    print_additions_table,
    print_error,
    print_registry_summary,
    print_submission_result,
    print_types_table,
)
from ..exceptions import AdditionsError, AdditionValidationError, ConfigurationError
from ..logging_config import logger, set_log_level

UPDATER_ADDITIONS_VERSION = __version__
DEFAULT_SETTINGS_FILE = "updater-additions.json"

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@dataclass
class Config:
    """Configuration settings for the additions tool."""

    settings_file: str = DEFAULT_SETTINGS_FILE
    plugin_dir: Optional[str] = None
    theme_root: Optional[str] = None
    option_name: str = DEFAULT_OPTION_NAME

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.settings_file:
            raise ConfigurationError("Settings file is not defined")
        if Path(self.settings_file).is_dir():
            raise ConfigurationError(f"Settings file is a directory: {self.settings_file}")
        if not self.option_name:
            raise ConfigurationError("Option name is not defined")

        if self.plugin_dir and not Path(self.plugin_dir).is_dir():
            raise ConfigurationError(f"Plugin directory not found: {self.plugin_dir}")
        if self.theme_root and not Path(self.theme_root).is_dir():
            raise ConfigurationError(f"Theme root not found: {self.theme_root}")


def load_config() -> Config:
    """
    Load configuration from environment variables.

    Returns:
        Configuration object (not yet validated)
    """
    return Config(
        settings_file=os.getenv("ADDITIONS_SETTINGS_FILE") or DEFAULT_SETTINGS_FILE,
        plugin_dir=os.getenv("WP_PLUGIN_DIR") or None,
        theme_root=os.getenv("WP_THEME_ROOT") or None,
    )


def build_config(
    settings_file: Optional[str] = None,
    plugin_dir: Optional[str] = None,
    theme_root: Optional[str] = None,
) -> Config:
    """
    Build configuration from CLI values with environment fallbacks.

    Args:
        settings_file: --settings-file value, or None
        plugin_dir: --plugin-dir value, or None
        theme_root: --theme-root value, or None

    Returns:
        Validated configuration object

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = load_config()
    if settings_file:
        config.settings_file = settings_file
    if plugin_dir:
        config.plugin_dir = plugin_dir
    if theme_root:
        config.theme_root = theme_root

    config.validate()
    return config


def evaluate_boolean(value: str) -> bool:
    """
    Evaluate string values as boolean.

    Args:
        value: String value to evaluate

    Returns:
        Boolean result
    """
    return value.lower() in ["true", "yes", "yeah", "1"]


def initialize_sentry() -> bool:
    """
    Initialize Sentry for error tracking.

    Reporting is opt-in: both TELEMETRY=true and SENTRY_DSN must be set.

    Returns:
        True if Sentry was initialized
    """
    sentry_dsn = os.getenv("SENTRY_DSN")
    if not evaluate_boolean(os.getenv("TELEMETRY", "false")) or not sentry_dsn:
        return False

    def before_send(event, hint):
        """
        Filter events before sending to Sentry.
        Don't send rejected submissions or configuration errors - these are user errors.
        """
        if "exc_info" in hint:
            exc_type, exc_value, tb = hint["exc_info"]
            if isinstance(exc_value, (AdditionValidationError, ConfigurationError)):
                return None
        return event

    sentry_sdk.init(
        dsn=sentry_dsn,
        send_default_pii=False,
        traces_sample_rate=0.0,
        before_send=before_send,
    )
    return True


def open_store(config: Config) -> SettingsStore:
    """Create a settings store backed by the configured settings file."""
    backend = JsonFileSettingsBackend(config.settings_file, option_name=config.option_name)
    return SettingsStore(backend, option_name=config.option_name)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--settings-file",
    help="JSON settings document storing the additions. [env: ADDITIONS_SETTINGS_FILE]",
)
@click.option("--plugin-dir", help="Directory holding installed plugins. [env: WP_PLUGIN_DIR]")
@click.option("--theme-root", help="Directory holding installed themes. [env: WP_THEME_ROOT]")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(
    UPDATER_ADDITIONS_VERSION,
    "--version",
    prog_name="updater-additions",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    settings_file: Optional[str],
    plugin_dir: Optional[str],
    theme_root: Optional[str],
    verbose: bool,
) -> None:
    """Register git-hosted plugins and themes that lack updater headers."""
    if verbose:
        set_log_level("DEBUG")

    try:
        ctx.obj = build_config(settings_file=settings_file, plugin_dir=plugin_dir, theme_root=theme_root)
    except ConfigurationError as e:
        print_error(str(e), title="Configuration")
        ctx.exit(1)


@cli.command("add")
@click.option("--type", "-t", "addition_type", required=True, help="Addition type, e.g. github_plugin.")
@click.option("--slug", "-s", required=True, help="Plugin folder/file.php or theme directory name.")
@click.option("--uri", "-u", required=True, help="Repository URL.")
@click.pass_obj
def add_command(config: Config, addition_type: str, slug: str, uri: str) -> None:
    """Add a repository to the updater."""
    try:
        store = open_store(config)
        record = store.submit_addition({"type": addition_type, "slug": slug, "uri": uri})
    except AdditionValidationError as e:
        print_submission_result(SubmissionResult.failure_result(e))
        sys.exit(1)
    except AdditionsError as e:
        print_error(str(e))
        sys.exit(1)

    print_submission_result(SubmissionResult.success_result(record))


@cli.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print additions as JSON.")
@click.pass_obj
def list_command(config: Config, as_json: bool) -> None:
    """List the stored additions."""
    try:
        records = open_store(config).additions
    except AdditionsError as e:
        print_error(str(e))
        sys.exit(1)

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in records], indent=2))
    else:
        print_additions_table(records)


@cli.command("registry")
@click.option("--summary", is_flag=True, help="Print a summary instead of the header sets.")
@click.pass_obj
def registry_command(config: Config, summary: bool) -> None:
    """Print the header sets contributed to the updater as JSON."""
    try:
        records = open_store(config).additions
    except AdditionsError as e:
        print_error(str(e))
        sys.exit(1)

    if not config.plugin_dir and not config.theme_root:
        logger.warning("Neither plugin directory nor theme root configured; no additions can be resolved")

    registry = AdditionsRegistry.for_directories(config.plugin_dir, config.theme_root)
    registry.register(records)

    if summary:
        print_registry_summary(registry.headers, len(records))
    else:
        click.echo(json.dumps(registry.headers, indent=2, ensure_ascii=False))


@cli.command("types")
@click.option("--json", "as_json", is_flag=True, help="Print types as JSON.")
def types_command(as_json: bool) -> None:
    """List the supported addition types."""
    providers = create_default_registry()
    if as_json:
        types = {t: providers.header_name_for(t) for t in providers.addition_types()}
        click.echo(json.dumps(types, indent=2))
    else:
        print_types_table(providers)


def main() -> None:
    """Entry point for the updater-additions command."""
    initialize_sentry()
    cli()
