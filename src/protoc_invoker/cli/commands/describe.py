"""protoc-invoker describe command - Compile a proto tree to a descriptor set."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError as PydanticValidationError

from protoc_invoker.cli.errors import (
    EXIT_SYSTEM_ERROR,
    EXIT_USER_ERROR,
    CLIError,
    format_pydantic_error,
)
from protoc_invoker.cli.output import info, print_json, success
from protoc_invoker.config import ProtoConfiguration, load_configuration
from protoc_invoker.descriptors import summarize
from protoc_invoker.errors import ConfigurationError, ProtocInvocationError
from protoc_invoker.invoker import ProtocInvoker


def _build_configuration(
    root: str | None,
    include_paths: tuple[str, ...],
    config_path: str | None,
    protoc_path: str | None,
) -> ProtoConfiguration:
    """Merge the config file (if any) with command line overrides."""
    data: dict[str, object] = {}
    if config_path is not None:
        data = load_configuration(config_path).model_dump()

    if root is not None:
        data["root_directory"] = root
    if include_paths:
        data["include_paths"] = (*data.get("include_paths", ()), *include_paths)  # type: ignore[misc]
    if protoc_path is not None:
        data["protoc_path"] = protoc_path

    if "root_directory" not in data:
        raise CLIError("A proto root is required: pass ROOT or --config")

    return ProtoConfiguration.model_validate(data)


@click.command("describe")
@click.argument("root", required=False, type=click.Path())
@click.option(
    "-I",
    "--include",
    "include_paths",
    multiple=True,
    type=click.Path(),
    help="Additional include directory (repeatable)",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(),
    default=None,
    help="YAML configuration file",
)
@click.option(
    "--protoc",
    "protoc_path",
    type=str,
    default=None,
    help="protoc binary to run [default: bundled grpc_tools compiler]",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the serialized FileDescriptorSet to this file",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the descriptor summary as JSON",
)
def describe(
    root: str | None,
    include_paths: tuple[str, ...],
    config_path: str | None,
    protoc_path: str | None,
    output_path: str | None,
    as_json: bool,
) -> None:
    """Compile every .proto file under ROOT into a descriptor set.

    Imports are included, so the result also describes files pulled in
    from include directories.

    Examples:

        protoc-invoker describe protos/ -I third_party/

        protoc-invoker describe --config protos.yaml --json

        protoc-invoker describe protos/ --output build/descriptors.pb
    """
    try:
        config = _build_configuration(root, include_paths, config_path, protoc_path)
    except ConfigurationError as e:
        raise CLIError(str(e), exit_code=EXIT_USER_ERROR) from e
    except PydanticValidationError as e:
        raise CLIError(format_pydantic_error(e), exit_code=EXIT_USER_ERROR) from e

    invoker = ProtocInvoker.for_config(config)

    try:
        descriptor_set = invoker.invoke()
    except ProtocInvocationError as e:
        raise CLIError(f"protoc invocation failed: {e}", exit_code=EXIT_SYSTEM_ERROR) from e

    if output_path is not None:
        output = Path(output_path)
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_bytes(descriptor_set.SerializeToString())
        except OSError as e:
            raise CLIError(f"Cannot write to: {output_path}", exit_code=EXIT_SYSTEM_ERROR) from e

    summary = summarize(descriptor_set)
    if as_json:
        print_json(summary)
        return

    for file_summary in summary["files"]:
        info(file_summary["name"])
        for message in file_summary["messages"]:
            info(f"  message {message}")
        for service in file_summary["services"]:
            info(f"  service {service['name']} ({len(service['methods'])} methods)")

    if output_path is not None:
        success(f"Wrote {summary['file_count']} file descriptor(s) to {output_path}")
    else:
        success(f"Described {summary['file_count']} file(s)")
