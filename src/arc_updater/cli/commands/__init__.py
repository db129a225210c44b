"""CLI commands for arc-updater."""

from . import clean, update, verify

__all__ = ["clean", "update", "verify"]
