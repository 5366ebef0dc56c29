"""Custom exceptions for protoc-invoker.

This module defines the exception hierarchy:
- ProtocInvokerError (base)
- ConfigurationError
- ProtocInvocationError
  - ProtoScanError
  - TempFileError
  - ProtocLaunchError
  - ProtocExitError
  - DescriptorParseError
"""

from __future__ import annotations

from collections.abc import Sequence


class ProtocInvokerError(Exception):
    """Base exception for all protoc-invoker operations.

    Attributes:
        message: Human-readable error description.
        details: Optional additional context about the error.

    Example:
        >>> try:
        ...     invoker.invoke()
        ... except ProtocInvokerError as e:
        ...     print(f"protoc failed: {e}")
    """

    def __init__(self, message: str, *, details: dict[str, str] | None = None) -> None:
        """Initialize ProtocInvokerError.

        Args:
            message: Human-readable error description.
            details: Optional additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation with details if present."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ConfigurationError(ProtocInvokerError):
    """Raised when a configuration file cannot be loaded.

    Raised when:
    - The YAML file does not exist or cannot be read
    - The YAML is malformed or is not a mapping
    - The values fail ProtoConfiguration validation

    Attributes:
        file_path: Path to the configuration file (if known).

    Example:
        >>> raise ConfigurationError("Invalid YAML", file_path="protos.yaml")
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        cause: str | None = None,
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Human-readable error description.
            file_path: Path to the configuration file.
            cause: The underlying cause of the failure.
        """
        details: dict[str, str] = {}
        if file_path:
            details["file"] = file_path
        if cause:
            details["cause"] = cause
        super().__init__(message, details=details)
        self.file_path = file_path
        self.cause = cause


class ProtocInvocationError(ProtocInvokerError):
    """Something went wrong while invoking protoc.

    Every failure after configuration (scan, temp file, launch, exit status,
    descriptor parsing) is raised as a subclass of this exception, so callers
    can catch a single type. The underlying exception, where there is one,
    is chained as ``__cause__``.
    """


class ProtoScanError(ProtocInvocationError):
    """The proto tree could not be walked.

    Example:
        >>> raise ProtoScanError(root="/protos", cause="Permission denied")
    """

    def __init__(
        self,
        message: str = "Unable to scan proto tree for files",
        *,
        root: str | None = None,
        cause: str | None = None,
    ) -> None:
        """Initialize ProtoScanError.

        Args:
            message: Human-readable error description.
            root: The root directory being scanned.
            cause: The underlying I/O failure.
        """
        details: dict[str, str] = {}
        if root:
            details["root"] = root
        if cause:
            details["cause"] = cause
        super().__init__(message, details=details)
        self.root = root


class TempFileError(ProtocInvocationError):
    """The temporary descriptor output file could not be created."""

    def __init__(
        self,
        message: str = "Unable to create temporary file",
        *,
        cause: str | None = None,
    ) -> None:
        """Initialize TempFileError.

        Args:
            message: Human-readable error description.
            cause: The underlying I/O failure.
        """
        super().__init__(message, details={"cause": cause} if cause else None)


class ProtocLaunchError(ProtocInvocationError):
    """The protoc compiler could not be executed.

    Raised when the binary is missing, cannot be forked, or the wait for
    it is interrupted.
    """

    def __init__(
        self,
        message: str = "Unable to execute protoc binary",
        *,
        protoc: str | None = None,
        cause: str | None = None,
    ) -> None:
        """Initialize ProtocLaunchError.

        Args:
            message: Human-readable error description.
            protoc: The compiler that failed to launch.
            cause: The underlying OS failure.
        """
        details: dict[str, str] = {}
        if protoc:
            details["protoc"] = protoc
        if cause:
            details["cause"] = cause
        super().__init__(message, details=details)
        self.protoc = protoc


class ProtocExitError(ProtocInvocationError):
    """protoc ran but exited with a non-zero status.

    Attributes:
        exit_code: The status protoc returned.
        args: The full argument list passed to protoc.

    Example:
        >>> err = ProtocExitError(1, ["a.proto", "--include_imports"])
        >>> str(err)
        "Got exit code [1] from protoc with args [a.proto, --include_imports]"
    """

    def __init__(self, exit_code: int, args: Sequence[str]) -> None:
        """Initialize ProtocExitError.

        Args:
            exit_code: The status protoc returned.
            args: The full argument list passed to protoc.
        """
        self.exit_code = exit_code
        self.protoc_args = tuple(args)
        message = (
            f"Got exit code [{exit_code}] from protoc with args [{', '.join(self.protoc_args)}]"
        )
        super().__init__(message)


class DescriptorParseError(ProtocInvocationError):
    """The generated descriptor set could not be read or parsed."""

    def __init__(
        self,
        message: str = "Unable to parse the generated descriptors",
        *,
        descriptor_path: str | None = None,
        cause: str | None = None,
    ) -> None:
        """Initialize DescriptorParseError.

        Args:
            message: Human-readable error description.
            descriptor_path: Path of the descriptor file protoc wrote.
            cause: The underlying read or decode failure.
        """
        details: dict[str, str] = {}
        if descriptor_path:
            details["path"] = descriptor_path
        if cause:
            details["cause"] = cause
        super().__init__(message, details=details)
        self.descriptor_path = descriptor_path
