"""Command module for verifying assemblies."""

from typing import List, Optional, Sequence

import typer
from loguru import logger

from arc_updater.cli.app import app
from arc_updater.cli.commands.command_utils import (
    CliState,
    display_report,
    exit_code,
    get_state,
    remote_services,
    resolve_targets,
)
from arc_updater.operations import VerifyOperation
from arc_updater.sync import TargetPathOperation


def run_verify(state: CliState, paths: Sequence[str]) -> int:
    targets = resolve_targets(paths)

    with remote_services(state.config) as (checksum_service, _):
        operation = VerifyOperation(checksum_service)
        success = TargetPathOperation(operation).execute(targets)

    display_report(operation.report, state.verbose)
    return exit_code(success)


@app.command()
def verify(
    ctx: typer.Context,
    paths: Optional[List[str]] = typer.Argument(
        None,
        help="Target directories or file paths. Defaults to the current working directory.",
        show_default=False,
    ),
) -> None:
    """Check that appropriately-named assemblies are current and intact."""
    try:
        code = run_verify(get_state(ctx), paths or [])
    except Exception as e:
        if not isinstance(e, typer.Exit):
            logger.exception("Verify failed")
            typer.echo(f"Error during verify: {e}", err=True)
            raise typer.Exit(1)
        raise
    raise typer.Exit(code)
