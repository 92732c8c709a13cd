"""CLI module for updater-additions.

This module provides the command-line interface. It supports both CLI
options and environment variables for configuration.
"""

from .main import (
    Config,
    build_config,
    cli,
    evaluate_boolean,
    load_config,
    main,
)

__all__ = [
    "cli",
    "main",
    "Config",
    "build_config",
    "load_config",
    "evaluate_boolean",
]
