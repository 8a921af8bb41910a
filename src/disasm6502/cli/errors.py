"""
CLI Error Handling
==================

Provides consistent error messages and exit codes for the command-line tool.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from disasm6502.errors import Disasm6502Error


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    DECODE_ERROR = 1     # Malformed ROM image or configuration
    INVALID_ARGS = 2     # Invalid arguments or missing/empty files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Unified exception handler for the CLI.

    Formats the error message appropriately, optionally prints traceback
    in verbose mode, and exits with the correct exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, Disasm6502Error):
        # Package errors carry their own "error:" formatting
        click.echo(str(error), err=True)
        sys.exit(ExitCode.DECODE_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error.format_message()}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, (FileNotFoundError, PermissionError, IsADirectoryError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        # Unexpected internal error
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
