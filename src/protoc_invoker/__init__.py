"""protoc-invoker: Compile a proto tree into a FileDescriptorSet.

This package provides:
- ProtoConfiguration: Proto root, include paths and compiler selection
- ProtocInvoker: Scan for .proto files, run protoc, parse the descriptor set
- scan_proto_files: Recursive .proto discovery
- Error types covering configuration and invocation failures
"""

from __future__ import annotations

__version__ = "0.1.0"

# Configuration
from protoc_invoker.config import ProtoConfiguration, load_configuration

# Error types
from protoc_invoker.errors import (
    ConfigurationError,
    DescriptorParseError,
    ProtocExitError,
    ProtocInvocationError,
    ProtocInvokerError,
    ProtocLaunchError,
    ProtoScanError,
    TempFileError,
)

# Invocation
from protoc_invoker.invoker import ProtocInvoker, build_protoc_args
from protoc_invoker.runner import BinaryProtocRunner, BundledProtocRunner, runner_for
from protoc_invoker.scanner import scan_proto_files

__all__ = [
    "__version__",
    # Configuration
    "ProtoConfiguration",
    "load_configuration",
    # Invocation
    "ProtocInvoker",
    "build_protoc_args",
    "scan_proto_files",
    # Runners
    "BundledProtocRunner",
    "BinaryProtocRunner",
    "runner_for",
    # Errors
    "ProtocInvokerError",
    "ConfigurationError",
    "ProtocInvocationError",
    "ProtoScanError",
    "TempFileError",
    "ProtocLaunchError",
    "ProtocExitError",
    "DescriptorParseError",
]
