"""Discovery of .proto files in a directory tree."""

from __future__ import annotations

import os
from pathlib import Path

import structlog

from protoc_invoker.errors import ProtoScanError

logger = structlog.get_logger(__name__)

PROTO_SUFFIX = ".proto"


def _raise_scan_error(err: OSError) -> None:
    raise err


def scan_proto_files(root: Path | str) -> frozenset[str]:
    """Find every .proto file under root, at any depth.

    Args:
        root: Directory to walk.

    Returns:
        Absolute paths of all files whose name ends in ``.proto``.

    Raises:
        ProtoScanError: If any part of the tree cannot be read. No partial
            result is returned.

    Example:
        >>> sorted(scan_proto_files("protos"))
        ['/work/protos/a/b/y.proto', '/work/protos/a/x.proto']
    """
    root_str = os.fspath(root)
    found: set[str] = set()

    # os.walk reports a missing root through onerror as well
    try:
        for dirpath, _dirnames, filenames in os.walk(root_str, onerror=_raise_scan_error):
            for filename in filenames:
                if filename.endswith(PROTO_SUFFIX):
                    found.add(os.path.abspath(os.path.join(dirpath, filename)))
    except OSError as e:
        raise ProtoScanError(root=root_str, cause=str(e)) from e

    logger.debug("proto_files_scanned", root=root_str, file_count=len(found))
    return frozenset(found)
