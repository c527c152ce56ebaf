"""CLI for prsync."""

from prsync.cli.main import app, main


__all__ = ["app", "main"]
