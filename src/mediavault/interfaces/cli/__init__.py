"""Command line interface for MediaVault."""

from mediavault.interfaces.cli.app import app, run_cli

__all__ = ["app", "run_cli"]
