"""utility functions for commands"""

from contextlib import contextmanager
from typing import Iterator, List, Sequence, Tuple

import typer
from rich.console import Console
from rich.tree import Tree

from arc_updater.cli.app import CliState
from arc_updater.config import UpdaterConfig
from arc_updater.operations.report import OperationReport
from arc_updater.services.assembly_service import AssemblyService
from arc_updater.services.checksum_service import ChecksumService
from arc_updater.services.download_client import DownloadClient
from arc_updater.services.exceptions import PathResolutionError
from arc_updater.targets import TargetPath, resolve_all

console = Console()

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def get_state(ctx: typer.Context) -> CliState:
    return ctx.find_root().obj


def exit_code(success: bool) -> int:
    return EXIT_SUCCESS if success else EXIT_FAILURE


def resolve_targets(paths: Sequence[str]) -> List[TargetPath]:
    """Resolve command line paths, exiting with failure if any is invalid."""
    try:
        return resolve_all(paths)
    except PathResolutionError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(EXIT_FAILURE)


def get_download_client(config: UpdaterConfig) -> DownloadClient:
    return DownloadClient(timeout=config.download_timeout)


@contextmanager
def remote_services(config: UpdaterConfig) -> Iterator[Tuple[ChecksumService, AssemblyService]]:
    """Create the checksum and assembly services, releasing the assembly afterwards."""
    download_client = get_download_client(config)
    checksum_service = ChecksumService(download_client, config.checksum_url)
    with AssemblyService(
        download_client, config.assembly_url, config.cache_file_path
    ) as assembly_service:
        yield checksum_service, assembly_service


def add_paths_to_tree(tree: Tree, label: str, paths: Sequence[str], style: str) -> None:
    if not paths:
        return
    branch = tree.add(f"[{style}]{label}[/{style}]")
    for path in sorted(paths):
        branch.add(f"[{style}]{path}[/{style}]")


def display_report(report: OperationReport, verbose: bool = False) -> None:
    """Display a one-line summary of an operation, or a tree when verbose."""
    if verbose:
        tree = Tree("[bold]Results[/bold]")
        add_paths_to_tree(tree, "Installed", list(report.installed), "green")
        add_paths_to_tree(tree, "Updated", list(report.updated), "yellow")
        add_paths_to_tree(tree, "Current", list(report.current), "green")
        add_paths_to_tree(tree, "Outdated or corrupt", list(report.outdated), "yellow")
        add_paths_to_tree(tree, "Removed", list(report.removed), "blue")
        add_paths_to_tree(tree, "Failed", list(report.failed), "red")
        console.print(tree)

    parts = []
    if report.installed:
        parts.append(f"[green]{len(report.installed)} installed[/green]")
    if report.updated:
        parts.append(f"[yellow]{len(report.updated)} updated[/yellow]")
    if report.current:
        parts.append(f"[green]{len(report.current)} current[/green]")
    if report.outdated:
        parts.append(f"[yellow]{len(report.outdated)} outdated[/yellow]")
    if report.removed:
        parts.append(f"[blue]{len(report.removed)} removed[/blue]")
    if report.failed:
        parts.append(f"[red]{len(report.failed)} failed[/red]")

    if parts:
        console.print(", ".join(parts))
    elif not report.cancelled:
        console.print("[green]Nothing to do[/green]")

    if report.cancelled:
        console.print("[red]✗ Operation cancelled, remaining targets were skipped[/red]")
