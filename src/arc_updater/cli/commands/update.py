"""Command module for installing and updating assemblies."""

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
from arc_updater.operations import UpdateOperation
from arc_updater.sync import TargetPathOperation


def run_update(state: CliState, paths: Sequence[str], delete: bool) -> int:
    """Run the update operation and return the exit code."""
    targets = resolve_targets(paths)
    config = state.config

    with remote_services(config) as (checksum_service, assembly_service):
        operation = UpdateOperation(
            checksum_service,
            assembly_service,
            delete=delete,
            recycle_dir=config.recycle_dir,
            default_file_name=config.default_file_name,
        )
        success = TargetPathOperation(operation).execute(targets)

    display_report(operation.report, state.verbose)
    return exit_code(success)


@app.command()
def update(
    ctx: typer.Context,
    paths: Optional[List[str]] = typer.Argument(
        None,
        help="Target directories or file paths. Defaults to the current working directory.",
        show_default=False,
    ),
    delete: bool = typer.Option(
        False,
        "--del",
        help="Delete outdated assemblies instead of moving them to the recycle area.",
    ),
) -> None:
    """Install the latest assembly, or replace outdated and corrupt ones.

    A directory without any appropriately-named assembly gets one installed
    under the default file name."""
    try:
        code = run_update(get_state(ctx), paths or [], delete)
    except Exception as e:
        if not isinstance(e, typer.Exit):
            logger.exception("Update failed")
            typer.echo(f"Error during update: {e}", err=True)
            raise typer.Exit(1)
        raise
    raise typer.Exit(code)
