"""Command module for removing assemblies."""

from typing import List, Optional, Sequence

import typer
from loguru import logger

from arc_updater.cli.app import app
from arc_updater.cli.commands.command_utils import (
    CliState,
    display_report,
    exit_code,
    get_state,
    resolve_targets,
)
from arc_updater.operations import CleanOperation
from arc_updater.sync import TargetPathOperation


def run_clean(state: CliState, paths: Sequence[str], delete: bool) -> int:
    targets = resolve_targets(paths)

    operation = CleanOperation(delete=delete, recycle_dir=state.config.recycle_dir)
    success = TargetPathOperation(operation).execute(targets)

    display_report(operation.report, state.verbose)
    return exit_code(success)


@app.command()
def clean(
    ctx: typer.Context,
    paths: Optional[List[str]] = typer.Argument(
        None,
        help="Target directories or file paths. Defaults to the current working directory.",
        show_default=False,
    ),
    delete: bool = typer.Option(
        False,
        "--del",
        help="Delete assemblies instead of moving them to the recycle area.",
    ),
) -> None:
    """Remove appropriately-named assemblies."""
    try:
        code = run_clean(get_state(ctx), paths or [], delete)
    except Exception as e:
        if not isinstance(e, typer.Exit):
            logger.exception("Clean failed")
            typer.echo(f"Error during clean: {e}", err=True)
            raise typer.Exit(1)
        raise
    raise typer.Exit(code)
