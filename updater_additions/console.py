"""Rich console utilities for updater-additions.

This module provides a shared Rich Console instance and helper functions
for CLI output.
"""

from typing import Dict, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from ._additions.models import AdditionRecord, HeaderSet
from ._additions.providers import ProviderRegistry
from ._settings.result import SubmissionResult

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "highlight": "magenta",
    }
)

# Shared console instance
console = Console(theme=custom_theme, color_system="auto")


def print_error(message: str, title: Optional[str] = None) -> None:
    """
    Print an error line.

    Args:
        message: Error message
        title: Optional title for the error
    """
    if title:
        console.print(f"[error]Error ({title}):[/error] {escape(message)}")
    else:
        console.print(f"[error]Error:[/error] {escape(message)}")


def print_submission_result(result: SubmissionResult) -> None:
    """Print the outcome of submitting an addition."""
    if result.success and result.record is not None:
        record = result.record
        console.print(f"[success]✓ Added {escape(record.type)}[/success] [highlight]{escape(record.slug)}[/highlight]")
        console.print(f"  URI: {escape(record.uri)}")
        console.print(f"  ID:  {record.id}")
    else:
        label = "Duplicate addition" if result.is_duplicate else "Addition rejected"
        console.print(f"[error]✗ {label}[/error]")
        if result.error_message:
            console.print(f"  {escape(result.error_message)}")


def print_additions_table(records: Sequence[AdditionRecord]) -> None:
    """
    Print the stored additions as a table.

    Args:
        records: Additions in storage order
    """
    if not records:
        console.print("[info]No additions registered.[/info]")
        return

    table = Table(title="Additions", show_header=True, header_style="bold")
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Slug", style="highlight", overflow="fold")
    table.add_column("URI", overflow="fold")
    table.add_column("ID", style="dim", overflow="fold")

    for record in records:
        table.add_row(escape(record.type), escape(record.slug), escape(record.uri), record.id)

    console.print(table)


def print_types_table(providers: ProviderRegistry) -> None:
    """Print the supported addition types with their repository header."""
    table = Table(title="Addition types", show_header=True, header_style="bold")
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Header", no_wrap=True)

    for addition_type in providers.addition_types():
        table.add_row(escape(addition_type), escape(providers.header_name_for(addition_type) or ""))

    console.print(table)


def print_registry_summary(headers: Dict[str, HeaderSet], total: int) -> None:
    """
    Print how many additions produced header sets.

    Args:
        headers: Built header sets keyed by slug
        total: Number of stored additions
    """
    skipped = total - len(headers)
    console.print(f"[success]✓ {len(headers)} of {total} additions registered[/success]")
    if skipped > 0:
        console.print(f"[warning]  {skipped} skipped (not installed)[/warning]")
