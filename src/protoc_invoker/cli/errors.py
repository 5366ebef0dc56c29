"""CLI error handling for protoc-invoker.

Wraps library exceptions into click exceptions with user-friendly messages
and the exit codes below.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
from pydantic import ValidationError as PydanticValidationError

from protoc_invoker.cli.output import error

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # Invalid configuration, missing paths
EXIT_SYSTEM_ERROR = 2  # protoc failure, unreadable tree, write failure


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(self.format_message())


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format Pydantic validation error into user-friendly message.

    Args:
        err: Pydantic ValidationError instance.

    Returns:
        Formatted error message with field paths and issues.

    Example:
        >>> format_pydantic_error(err)
        "Validation failed:\\n  - root_directory: Value error, Proto root does not exist: x"
    """
    errors: list[ErrorDetails] = err.errors()
    lines = ["Validation failed:"]

    for e in errors:
        loc = ".".join(str(x) for x in e["loc"])
        lines.append(f"  - {loc}: {e['msg']}")

    return "\n".join(lines)
