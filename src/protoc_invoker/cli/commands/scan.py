"""protoc-invoker scan command - List discovered .proto files."""

from __future__ import annotations

import click

from protoc_invoker.cli.errors import EXIT_SYSTEM_ERROR, CLIError
from protoc_invoker.cli.output import info, success
from protoc_invoker.errors import ProtoScanError
from protoc_invoker.scanner import scan_proto_files


@click.command("scan")
@click.argument("root", type=click.Path(exists=True, file_okay=False))
def scan(root: str) -> None:
    """List every .proto file under ROOT.

    Prints absolute paths, sorted, one per line.

    Examples:

        protoc-invoker scan protos/
    """
    try:
        proto_files = scan_proto_files(root)
    except ProtoScanError as e:
        raise CLIError(str(e), exit_code=EXIT_SYSTEM_ERROR) from e

    for path in sorted(proto_files):
        info(path)
    success(f"Found {len(proto_files)} .proto file(s) under {root}")
