"""Main CLI entry point for arc-updater."""  # pragma: no cover

from arc_updater.cli.app import app  # pragma: no cover

# Register commands
from arc_updater.cli.commands import clean, update, verify  # pragma: no cover

__all__ = ["app", "clean", "update", "verify"]  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    app()
