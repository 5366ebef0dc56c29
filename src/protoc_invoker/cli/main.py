"""CLI entry point for protoc-invoker."""

from __future__ import annotations

import click
import rich_click as rclick

from protoc_invoker import __version__
from protoc_invoker.cli.commands.describe import describe
from protoc_invoker.cli.commands.scan import scan
from protoc_invoker.cli.output import set_no_color
from protoc_invoker.observability import configure_logging

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


@click.group(cls=rclick.RichGroup)
@click.version_option(version=__version__, prog_name="protoc-invoker")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Minimum level for structured log output.",
)
def cli(log_level: str) -> None:
    """protoc-invoker - Compile proto trees into descriptor sets.

    **Commands:**

    - `protoc-invoker scan ROOT` - List the .proto files that would be compiled
    - `protoc-invoker describe ROOT` - Run protoc and summarize the descriptor set
    """
    configure_logging(log_level=log_level, json_format=False)


cli.add_command(scan)
cli.add_command(describe)


if __name__ == "__main__":
    cli()
