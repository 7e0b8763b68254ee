"""
hone — CLI entrypoint.

Usage:
    hone --search firefox
    hone --download yay
    hone --update --no-sysupgrade
    python -m hone.main --help
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from hone import __version__
from hone.core.observability.logging_config import resolve_level, setup_logging


def _fail(message: str) -> None:
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(1)


def _check_usage(
    download: str | None,
    remove: str | None,
    search: str | None,
    list_: bool,
    update: bool,
    names_only: bool,
    no_sysupgrade: bool,
) -> str | None:
    """Return a usage error message, or None when the flags are consistent."""
    selected = sum([bool(download), bool(remove), bool(search), list_, update])
    if selected > 1:
        return "You can only use a single option at a time!"
    if names_only and not search:
        return "Do not use --name outside of --search!"
    if no_sysupgrade and not update:
        return "Do not use --no-sysupgrade outside of --update!"
    return None


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="hone")
@click.option("-d", "--download", metavar="PACKAGE", default=None, help="Download, build and install an AUR package.")
@click.option("-r", "--remove", metavar="PACKAGE", default=None, help="Remove an installed AUR package.")
@click.option("-s", "--search", metavar="QUERY", default=None, help="Search the AUR by name.")
@click.option("-n", "--name", "names_only", is_flag=True, help="Only list package names. Use with --search.")
@click.option("-l", "--list", "list_", is_flag=True, help="List recorded AUR packages.")
@click.option("-u", "--update", is_flag=True, help="Upgrade AUR packages, after upgrading the system.")
@click.option("--no-sysupgrade", is_flag=True, help="Skip 'pacman -Syu'. Use with --update.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to config.yml (default: ~/.config/hone/config.yml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    download: str | None,
    remove: str | None,
    search: str | None,
    names_only: bool,
    list_: bool,
    update: bool,
    no_sysupgrade: bool,
    as_json: bool,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """hone — AUR helper only.

    Installs, upgrades, removes and searches AUR packages, keeping a
    record of what it installed under ~/.cache/hone.
    """
    usage_error = _check_usage(download, remove, search, list_, update, names_only, no_sysupgrade)
    if usage_error:
        _fail(usage_error)

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            env_level=os.environ.get("HONE_LOG_LEVEL"),
        ),
        log_file=os.environ.get("HONE_LOG_FILE"),
        log_file_level=os.environ.get("HONE_LOG_FILE_LEVEL"),
        quiet_third_party=not debug,
    )

    if not any([download, remove, search, list_, update]):
        click.echo(ctx.get_help())
        return

    from hone.core.config.loader import ConfigError, load_config
    from hone.core.context import build_services

    try:
        config = load_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        _fail(str(e))
        return

    services = build_services(config)

    if search:
        _search(services, search, names_only, as_json)
    elif download:
        _install(services, download, as_json)
    elif remove:
        _remove(services, remove, as_json)
    elif list_:
        _list(services, as_json)
    elif update:
        _upgrade(services, no_sysupgrade, as_json)


# ── Actions ─────────────────────────────────────────────────────


def _search(services, query: str, names_only: bool, as_json: bool) -> None:
    from hone.core.use_cases.search import run_search
    from hone.ui.cli import render

    result = run_search(query, services, names_only=names_only)
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return
    render.search_result(result, names_only)


def _install(services, name: str, as_json: bool) -> None:
    from hone.core.use_cases.install import install_package
    from hone.ui.cli import render

    result = install_package(name, services, on_progress=None if as_json else render.progress)
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        render.install_result(result)
    if not result.ok:
        sys.exit(1)


def _remove(services, name: str, as_json: bool) -> None:
    from hone.core.use_cases.remove import remove_package
    from hone.ui.cli import render

    result = remove_package(name, services)
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        render.remove_result(result)
    if not result.ok:
        sys.exit(1)


def _list(services, as_json: bool) -> None:
    from hone.core.use_cases.listing import list_installed
    from hone.ui.cli import render

    result = list_installed(services)
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
    else:
        render.list_result(result)
    if result.error:
        sys.exit(1)


def _upgrade(services, skip_system_upgrade: bool, as_json: bool) -> None:
    from hone.core.use_cases.upgrade import run_upgrade
    from hone.ui.cli import render

    if not as_json:
        click.secho("Performing upgrades!", fg="cyan", bold=True)

    result = run_upgrade(
        services,
        skip_system_upgrade=skip_system_upgrade,
        on_progress=None if as_json else render.progress,
    )
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        render.drift_report(result.report)
        render.batch_result(result.batch)
    if not result.ok:
        sys.exit(1)


def main() -> None:
    """Console-script entrypoint: every usage error exits with status 1."""
    try:
        cli.main(prog_name="hone", standalone_mode=False)
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
    except click.ClickException as e:
        e.show()
        sys.exit(1)


if __name__ == "__main__":
    main()
