"""ProtocInvoker: compile a proto tree into a FileDescriptorSet.

The invoker scans a directory for .proto files, runs protoc on all of them
with ``--include_imports`` and ``--descriptor_set_out`` pointing at a fresh
temporary file, then parses that file back into memory.
"""

from __future__ import annotations

from collections.abc import Iterable
import os
from pathlib import Path
import tempfile

from google.protobuf.descriptor_pb2 import FileDescriptorSet
from google.protobuf.message import DecodeError
import structlog

from protoc_invoker.config import ProtoConfiguration
from protoc_invoker.errors import DescriptorParseError, ProtocExitError, TempFileError
from protoc_invoker.observability import protoc_operation
from protoc_invoker.runner import ProtocRunner, runner_for
from protoc_invoker.scanner import scan_proto_files

logger = structlog.get_logger(__name__)

DESCRIPTOR_PREFIX = "descriptor"
DESCRIPTOR_SUFFIX = ".pb.bin"


def _absolute(path: str | Path) -> str:
    return os.path.abspath(os.fspath(path))


def include_path_args(include_paths: Iterable[str]) -> list[str]:
    """Build one ``-I`` flag per distinct include directory.

    Args:
        include_paths: Include directories, in priority order.

    Returns:
        ``-I<path>`` flags with duplicates removed, first occurrence kept.
    """
    return [f"-I{path}" for path in dict.fromkeys(include_paths)]


def build_protoc_args(
    proto_files: Iterable[str],
    include_paths: Iterable[str],
    descriptor_path: str,
    proto_root: str,
) -> list[str]:
    """Assemble the full protoc argument list.

    Args:
        proto_files: Absolute paths of the .proto files to compile.
        include_paths: Absolute include directories.
        descriptor_path: Absolute path protoc writes the descriptor set to.
        proto_root: Absolute proto root passed as ``--proto_path``.

    Returns:
        Positional files (sorted), ``-I`` flags, ``--descriptor_set_out``,
        ``--include_imports`` and ``--proto_path``, in that order.
    """
    return [
        *sorted(proto_files),
        *include_path_args(include_paths),
        f"--descriptor_set_out={descriptor_path}",
        "--include_imports",
        f"--proto_path={proto_root}",
    ]


class ProtocInvoker:
    """Invoke protoc on every .proto file in a directory tree.

    Instances are immutable and may be reused for any number of
    invocations; each invocation gets its own temporary descriptor file.
    Build instances with ``for_config``; the constructor expects paths
    that have already been validated and made absolute.

    Attributes:
        proto_root: Absolute proto root, passed as ``--proto_path``.
        include_paths: Absolute include directories.
        runner: The compiler runner.
        keep_descriptor_file: Whether descriptor files are left on disk.

    Example:
        >>> config = ProtoConfiguration(root_directory="protos")
        >>> invoker = ProtocInvoker.for_config(config)
        >>> descriptor_set = invoker.invoke()
        >>> [f.name for f in descriptor_set.file]
        ['a/b/y.proto', 'a/x.proto']
    """

    __slots__ = ("_include_paths", "_keep_descriptor_file", "_proto_root", "_runner")

    def __init__(
        self,
        *,
        _proto_root: str,
        _include_paths: tuple[str, ...],
        _runner: ProtocRunner,
        _keep_descriptor_file: bool = True,
    ) -> None:
        self._proto_root = _proto_root
        self._include_paths = _include_paths
        self._runner = _runner
        self._keep_descriptor_file = _keep_descriptor_file

    @classmethod
    def for_config(
        cls,
        config: ProtoConfiguration,
        *,
        runner: ProtocRunner | None = None,
    ) -> ProtocInvoker:
        """Create a ProtocInvoker from a validated configuration.

        Args:
            config: Proto configuration. Its paths were checked when it
                was constructed.
            runner: Compiler runner override. Defaults to the runner
                selected by ``config.protoc_path``.

        Returns:
            Ready-to-use invoker holding absolute paths.
        """
        return cls(
            _proto_root=_absolute(config.root_directory),
            _include_paths=tuple(_absolute(p) for p in config.include_paths),
            _runner=runner if runner is not None else runner_for(config),
            _keep_descriptor_file=config.keep_descriptor_file,
        )

    @property
    def proto_root(self) -> str:
        return self._proto_root

    @property
    def include_paths(self) -> tuple[str, ...]:
        return self._include_paths

    @property
    def runner(self) -> ProtocRunner:
        return self._runner

    @property
    def keep_descriptor_file(self) -> bool:
        return self._keep_descriptor_file

    def invoke(self, proto_root: Path | str | None = None) -> FileDescriptorSet:
        """Run protoc on all .proto files under proto_root.

        Args:
            proto_root: Tree to scan for .proto files. Defaults to the
                configured root. ``--proto_path`` is always the configured
                root.

        Returns:
            FileDescriptorSet describing every scanned file and everything
            it imports.

        Raises:
            TempFileError: If the descriptor output file cannot be created.
            ProtoScanError: If the tree cannot be walked.
            ProtocLaunchError: If protoc cannot be executed.
            ProtocExitError: If protoc exits with a non-zero status.
            DescriptorParseError: If the output cannot be read or parsed.
        """
        scan_root = _absolute(proto_root) if proto_root is not None else self._proto_root

        with protoc_operation(
            "invoke", root=scan_root, include_count=len(self._include_paths)
        ) as current_span:
            descriptor_path = self._create_descriptor_file()

            proto_files = scan_proto_files(scan_root)
            current_span.set_attribute("protoc.file_count", len(proto_files))

            args = build_protoc_args(
                proto_files,
                [*self._include_paths, *self._runner.builtin_include_paths],
                descriptor_path,
                self._proto_root,
            )
            self._run(args)

            descriptor_set = self._parse(descriptor_path)
            current_span.set_attribute("protoc.descriptor_count", len(descriptor_set.file))
            logger.debug(
                "descriptor_set_parsed",
                scanned_files=len(proto_files),
                descriptor_files=len(descriptor_set.file),
                descriptor_path=descriptor_path if self._keep_descriptor_file else None,
            )
            return descriptor_set

    def _create_descriptor_file(self) -> str:
        try:
            fd, path = tempfile.mkstemp(prefix=DESCRIPTOR_PREFIX, suffix=DESCRIPTOR_SUFFIX)
        except OSError as e:
            raise TempFileError(cause=str(e)) from e
        os.close(fd)
        return _absolute(path)

    def _run(self, args: list[str]) -> None:
        status = self._runner.run(args)
        if status != 0:
            raise ProtocExitError(status, args)

    def _parse(self, descriptor_path: str) -> FileDescriptorSet:
        try:
            payload = Path(descriptor_path).read_bytes()
            descriptor_set = FileDescriptorSet.FromString(payload)
        except (OSError, DecodeError) as e:
            raise DescriptorParseError(descriptor_path=descriptor_path, cause=str(e)) from e

        if not self._keep_descriptor_file:
            Path(descriptor_path).unlink(missing_ok=True)
        return descriptor_set
