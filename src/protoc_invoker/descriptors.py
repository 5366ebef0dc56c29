"""Read-only views over a parsed FileDescriptorSet."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from google.protobuf.descriptor_pb2 import (
    DescriptorProto,
    FileDescriptorProto,
    FileDescriptorSet,
)


def file_names(descriptor_set: FileDescriptorSet) -> list[str]:
    """Return the proto-path-relative names of every file in the set."""
    return [f.name for f in descriptor_set.file]


def _message_names(messages: Any, prefix: str) -> Iterator[str]:
    message: DescriptorProto
    for message in messages:
        full_name = f"{prefix}{message.name}"
        yield full_name
        yield from _message_names(message.nested_type, f"{full_name}.")


def summarize_file(file_proto: FileDescriptorProto) -> dict[str, Any]:
    """Summarize one file descriptor.

    Nested messages are flattened into dotted names relative to the file's
    package, e.g. ``Outer.Inner``.

    Args:
        file_proto: File descriptor to summarize.

    Returns:
        Dictionary with name, package, syntax, dependencies, messages,
        enums and services.
    """
    return {
        "name": file_proto.name,
        "package": file_proto.package,
        "syntax": file_proto.syntax or "proto2",
        "dependencies": list(file_proto.dependency),
        "messages": list(_message_names(file_proto.message_type, "")),
        "enums": [e.name for e in file_proto.enum_type],
        "services": [
            {"name": s.name, "methods": [m.name for m in s.method]} for s in file_proto.service
        ],
    }


def summarize(descriptor_set: FileDescriptorSet) -> dict[str, Any]:
    """Summarize a descriptor set for display or JSON output.

    Example:
        >>> summarize(descriptor_set)["files"][0]["messages"]
        ['Y']
    """
    return {
        "file_count": len(descriptor_set.file),
        "files": [summarize_file(f) for f in descriptor_set.file],
    }
