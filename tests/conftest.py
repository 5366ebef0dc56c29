"""Shared pytest fixtures for protoc-invoker tests.

This module provides proto trees on disk and test doubles for the
compiler runner, used across unit and integration tests.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
import sys

import pytest
import structlog

from tests.fakes import FakeRunner


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture
def proto_root(tmp_path: Path) -> Path:
    """Create a proto tree with a/x.proto, a/b/y.proto and c.txt.

    x.proto imports y.proto relative to the root.

    Returns:
        Path to the root of the tree.
    """
    root = tmp_path / "protos"
    (root / "a" / "b").mkdir(parents=True)
    (root / "a" / "b" / "y.proto").write_text(
        'syntax = "proto3";\n\npackage a.b;\n\nmessage Y {\n  string value = 1;\n}\n'
    )
    (root / "a" / "x.proto").write_text(
        'syntax = "proto3";\n\npackage a;\n\nimport "a/b/y.proto";\n\n'
        "message X {\n  a.b.Y y = 1;\n}\n"
    )
    (root / "c.txt").write_text("not a proto")
    return root


@pytest.fixture
def include_dir(tmp_path: Path) -> Path:
    """Create an include directory outside the proto root.

    Returns:
        Path to a directory holding common/money.proto.
    """
    include = tmp_path / "third_party"
    (include / "common").mkdir(parents=True)
    (include / "common" / "money.proto").write_text(
        'syntax = "proto3";\n\npackage common;\n\n'
        "message Money {\n  string currency = 1;\n  int64 units = 2;\n}\n"
    )
    return include


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Return a FakeRunner that succeeds."""
    return FakeRunner()


@pytest.fixture
def make_runner() -> Callable[..., FakeRunner]:
    """Factory fixture for FakeRunner with custom exit code or payload."""
    return FakeRunner
