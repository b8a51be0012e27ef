"""
Unified CLI Error Handling
==========================

Provides consistent error handling and exit codes for the sbops tool.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from sharpboy.errors import SharpBoyError


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    LOOKUP_ERROR = 1     # Unknown opcode, broken catalog, bad configuration
    INVALID_ARGS = 2     # Invalid command-line arguments
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Unified exception handler for CLI commands.

    Formats the error message, optionally prints the traceback in verbose
    mode, and exits with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, SharpBoyError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.LOOKUP_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
