"""Shared CLI helpers for kctrust."""

import json
import sys
from typing import Any, Callable, Dict, List, NoReturn

import click

from .errors import (
    CertificateNotFoundError,
    CommandError,
    SubjectFormatError,
    UnsupportedFieldTypeError,
)


class ExitCodes:
    """Standard exit codes for CLI operations."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_INPUT = 2
    NOT_FOUND = 3
    COMMAND_FAILED = 4


def handle_trust_error(exc: Exception) -> NoReturn:
    """Report an error on stderr and exit with the matching exit code.

    Args:
        exc: The exception to handle
    """
    if isinstance(exc, CertificateNotFoundError):
        click.echo(f"✗ Certificate not found: {exc.output.strip()}", err=True)
        sys.exit(ExitCodes.NOT_FOUND)
    elif isinstance(exc, CommandError):
        click.echo(f"✗ Command failed: {exc.output.strip()}", err=True)
        sys.exit(ExitCodes.COMMAND_FAILED)
    elif isinstance(exc, (SubjectFormatError, UnsupportedFieldTypeError)):
        click.echo(f"✗ Invalid input: {exc}", err=True)
        sys.exit(ExitCodes.INVALID_INPUT)
    else:
        click.echo(f"✗ Error: {exc}", err=True)
        sys.exit(ExitCodes.GENERAL_ERROR)


def format_success(message: str, data=None) -> None:
    """Format success messages consistently.

    Args:
        message: Success message to display
        data: Optional data to display with the message
    """
    click.echo(f"✓ {message}")
    if data:
        for key, value in data.items():
            click.echo(f"  {key}: {value}")


def output_list_data(
    items: List[Dict[str, Any]],
    output_format: str,
    headers: List[str],
    table_data_func: Callable[[Dict[str, Any]], List[Any]],
    empty_message: str = "No items found.",
) -> None:
    """Handle JSON and table output for list commands consistently.

    Args:
        items: List of items to output
        output_format: 'json' or 'table'
        headers: List of header names for table output
        table_data_func: Function that converts items to table rows
        empty_message: Message to display when no items are found
    """
    if not items:
        if output_format.lower() == "json":
            click.echo("[]")
        else:
            click.echo(empty_message)
        return

    if output_format.lower() == "json":
        click.echo(json.dumps(items, indent=2))
    else:
        from tabulate import tabulate

        table = [table_data_func(item) for item in items]
        styled_headers = [click.style(h, fg="blue", bold=True) for h in headers]
        click.echo(tabulate(table, headers=styled_headers, tablefmt="github"))
