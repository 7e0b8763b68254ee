"""
CLI rendering — turns use case results into terminal output.

Thin by design: every function takes a result object and echoes it.
"""

from __future__ import annotations

import click

from hone.core.services.build_pipeline import BatchResult, BuildState, InstallResult, RemoveResult
from hone.core.services.drift import DriftReport
from hone.core.services.search import SearchResult
from hone.core.use_cases.listing import ListResult

_STATE_MESSAGES = {
    BuildState.RESOLVING: "Looking up {name}...",
    BuildState.CLONING: "Cloning {name}...",
    BuildState.BUILDING: "Building {name}...",
    BuildState.CLEANING: "Successfully built {name}, cleaning workspace...",
    BuildState.RECORDED: "Recorded {name}",
}


def progress(name: str, state: BuildState) -> None:
    """Progress callback handed to the build pipeline."""
    template = _STATE_MESSAGES.get(state)
    if template:
        click.secho(f":: {template.format(name=name)}", fg="cyan")


def search_result(result: SearchResult, names_only: bool) -> None:
    if not result.found:
        click.echo("No packages found.")
        return

    for match in result.matches:
        if names_only:
            click.echo(match.name)
            continue
        click.secho(match.name, fg="white", bold=True, nl=False)
        click.secho(f" {match.version}", fg="green", nl=False)
        if match.installed:
            click.secho(" (Installed)", fg="cyan", nl=False)
        click.echo()
        click.echo(f"    {match.description}")


def list_result(result: ListResult) -> None:
    if not result.entries:
        click.secho("No AUR packages recorded yet.", fg="yellow")
        return
    for entry in result.entries:
        click.echo(f"{entry.name} {entry.version}")


def install_result(result: InstallResult) -> None:
    if result.updates_due:
        click.secho(f"⚠️  You have updates due: {' '.join(result.updates_due)}", fg="yellow")
        click.echo("   Run hone --update to upgrade them.")
    if result.ok:
        click.secho(f"✅ Installed {result.name} {result.version}", fg="green", bold=True)
        return
    click.secho(f"❌ {result.error}", fg="red", err=True)
    if result.failed_at == BuildState.BUILDING and result.workspace:
        click.echo(f"   Build files kept in {result.workspace}", err=True)


def remove_result(result: RemoveResult) -> None:
    if result.ok:
        click.secho(f"✅ Removed {result.name}", fg="green", bold=True)
        if not result.untracked:
            click.echo("   (it was not recorded in the manifest)")
        return
    click.secho(f"❌ {result.error}", fg="red", err=True)


def drift_report(report: DriftReport) -> None:
    if not report.drifts:
        click.secho("All AUR packages are up to date.", fg="green")
        return
    click.secho(f"📦 Outdated ({len(report.drifts)}):", fg="yellow", bold=True)
    for d in report.drifts:
        click.echo(f"   {d.name:<30} {d.installed:<16} → {d.available}")


def batch_result(batch: BatchResult) -> None:
    if batch.ok:
        if batch.updated:
            click.secho(f"✅ Successfully updated: {' '.join(batch.updated)}", fg="green", bold=True)
        return
    click.secho(f"❌ {batch.error}", fg="red", err=True)
