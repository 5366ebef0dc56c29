"""Runners that execute the protoc compiler.

Two runners are provided:
- BundledProtocRunner: the protoc compiled into grpcio-tools, run in-process
- BinaryProtocRunner: a protoc executable on disk, run as a subprocess

Both take the protoc argument list (without argv[0]) and return the exit
status. Neither captures the compiler's stdout or stderr.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
import subprocess
from typing import TYPE_CHECKING, Protocol

import structlog

from protoc_invoker.errors import ProtocLaunchError

if TYPE_CHECKING:
    from protoc_invoker.config import ProtoConfiguration

logger = structlog.get_logger(__name__)

DEFAULT_PROTOC_BINARY = "protoc"


class ProtocRunner(Protocol):
    """Anything that can run protoc with an argument list."""

    @property
    def name(self) -> str:
        """Human-readable compiler name used in logs and errors."""
        ...

    @property
    def builtin_include_paths(self) -> tuple[str, ...]:
        """Include directories the compiler needs for well-known types."""
        ...

    def run(self, args: Sequence[str]) -> int:
        """Run protoc and return its exit status."""
        ...


class BundledProtocRunner:
    """Run the protoc shipped inside grpcio-tools.

    grpcio-tools does not add its well-known ``google/protobuf/*.proto``
    sources to the search path on its own, so they are exposed through
    ``builtin_include_paths``.
    """

    name = "grpc_tools.protoc"

    @property
    def builtin_include_paths(self) -> tuple[str, ...]:
        import grpc_tools

        include_dir = Path(grpc_tools.__file__).resolve().parent / "_proto"
        if include_dir.is_dir():
            return (str(include_dir),)
        return ()

    def run(self, args: Sequence[str]) -> int:
        from grpc_tools import protoc

        logger.debug("protoc_run", protoc=self.name, arg_count=len(args))
        try:
            return int(protoc.main([self.name, *args]))
        except OSError as e:
            raise ProtocLaunchError(protoc=self.name, cause=str(e)) from e


class BinaryProtocRunner:
    """Run a protoc executable as a blocking subprocess.

    Args:
        protoc_path: Path to, or name on PATH of, the protoc binary.

    Example:
        >>> runner = BinaryProtocRunner("/usr/local/bin/protoc")
        >>> runner.run(["--version"])
        0
    """

    builtin_include_paths: tuple[str, ...] = ()

    def __init__(self, protoc_path: str = DEFAULT_PROTOC_BINARY) -> None:
        self.protoc_path = protoc_path

    @property
    def name(self) -> str:
        return self.protoc_path

    def run(self, args: Sequence[str]) -> int:
        logger.debug("protoc_run", protoc=self.protoc_path, arg_count=len(args))
        try:
            completed = subprocess.run([self.protoc_path, *args], check=False)
        except OSError as e:
            raise ProtocLaunchError(protoc=self.protoc_path, cause=str(e)) from e
        return completed.returncode


def runner_for(config: ProtoConfiguration) -> ProtocRunner:
    """Pick the runner a configuration asks for.

    Args:
        config: Proto configuration.

    Returns:
        BinaryProtocRunner when ``protoc_path`` is set, otherwise
        BundledProtocRunner.
    """
    if config.protoc_path:
        return BinaryProtocRunner(config.protoc_path)
    return BundledProtocRunner()
