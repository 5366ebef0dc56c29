"""Rich console output utilities for the protoc-invoker CLI.

Colored success/error messages that respect the NO_COLOR environment
variable and the --no-color flag.
"""

from __future__ import annotations

import json
import os
from typing import Any

from rich.console import Console
from rich.markup import escape

_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False) -> Console:
    """Create a Rich Console instance with appropriate color settings.

    Args:
        no_color: If True, disable colored output. Also respects NO_COLOR env var.

    Returns:
        Configured Console instance.
    """
    force_terminal = None
    if no_color or _force_no_color:
        force_terminal = False
    return Console(force_terminal=force_terminal, no_color=no_color or _force_no_color)


console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with green checkmark."""
    console.print(f"[green]✓[/green] {escape(message)}", soft_wrap=True, **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with red X.

    The message is escaped, so paths and protoc arguments containing
    brackets print verbatim.
    """
    console.print(f"[red]✗[/red] {escape(message)}", highlight=False, soft_wrap=True, **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print an informational message without markup."""
    console.print(message, markup=False, highlight=False, soft_wrap=True, **kwargs)


def print_json(data: dict[str, Any], **kwargs: Any) -> None:
    """Print JSON data with syntax highlighting."""
    console.print_json(json.dumps(data), **kwargs)


def set_no_color(no_color: bool) -> None:
    """Update the global console to enable/disable colors.

    Args:
        no_color: If True, disable colored output.
    """
    global console
    console = create_console(no_color=no_color)
