"""Command line interface for protoc-invoker."""

from __future__ import annotations

from protoc_invoker.cli.main import cli

__all__ = ["cli"]
