from dataclasses import dataclass
from typing import List, Optional

import click
import typer
from typer.core import TyperGroup

from arc_updater.config import UpdaterConfig
from arc_updater.utils import setup_logging


@dataclass
class CliState:
    """Settings shared by all commands of one invocation."""

    config: UpdaterConfig
    verbose: bool = False


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:  # pragma: no cover
        import arc_updater

        typer.echo(f"arc-updater version: {arc_updater.__version__}")
        raise typer.Exit()


class DefaultUpdateGroup(TyperGroup):
    """Runs ``update`` when the first argument after the global options is not a command.

    This lets ``arc-updater bin64 --del`` stand for ``arc-updater update bin64 --del``.
    """

    default_command = "update"

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        # global options are all flags, so they never consume a value
        global_options = {opt for param in self.get_params(ctx) for opt in param.opts}
        index = 0
        while index < len(args) and args[index] in global_options:
            index += 1
        if index < len(args) and args[index] not in self.commands:
            args = [*args[:index], self.default_command, *args[index:]]
        return super().parse_args(ctx, args)


app = typer.Typer(name="arc-updater", cls=DefaultUpdateGroup)


@app.callback(invoke_without_command=True)
def app_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show progress messages and detailed results.",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Check for updates to ArcDPS, download the latest version, verify its
    integrity, and install it to the current working directory or to the
    given directories and file paths."""

    config = UpdaterConfig()
    setup_logging(
        log_file=config.log_file_path,
        console_level="INFO" if verbose else "WARNING",
    )
    ctx.obj = CliState(config=config, verbose=verbose)

    # No command: update the current working directory
    if ctx.invoked_subcommand is None:
        from arc_updater.cli.commands.update import run_update

        raise typer.Exit(run_update(ctx.obj, [], delete=False))
