"""Scan command - audit every repository under a directory."""

from __future__ import annotations

from pathlib import Path

import typer

from fleetcheck.audit.fleet import FleetEntry, get_summary, scan as scan_fleet
from fleetcheck.cli.context import build_context
from fleetcheck.core.errors import ErrorCode
from fleetcheck.output.console import Style
from fleetcheck.output.report import print_scan


def scan(
    root: Path = typer.Argument(
        Path("."),
        help="Directory whose immediate subdirectories are git clones",
        show_default=False,
    ),
    remote: str | None = typer.Option(
        None,
        "--remote",
        "-r",
        help="Remote to compare against (default: from config, else origin)",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: ROOT/fleetcheck.toml if present)",
    ),
    no_fetch: bool = typer.Option(
        False,
        "--no-fetch",
        help="Compare against the last fetched state instead of fetching",
    ),
    show_all: bool = typer.Option(False, "--all", "-a", help="Also list clean repositories"),
    strict: bool = typer.Option(
        False,
        "--strict",
        help=f"Exit with code {int(ErrorCode.FINDINGS)} if anything needs attention",
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
) -> None:
    """Report uncommitted, stashed, unpushed and unpulled work, and hook drift."""
    ctx = build_context(
        root,
        config_path=config,
        remote=remote,
        fetch=False if no_fetch else None,
        no_color=no_color,
    )

    ctx.console.print(
        f"Scanning repositories in {ctx.root} against remote '{ctx.config.remote.name}'",
        Style.DIM,
    )
    if not ctx.config.remote.fetch:
        ctx.console.print("Not fetching: results reflect the last fetch", Style.DIM)
    ctx.console.newline()

    try:
        entries = scan_fleet(ctx.root, ctx.config)
    except OSError as e:
        typer.echo(f"error: cannot list {ctx.root}: {e.strerror or e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    print_scan(entries, ctx.console, hooks=ctx.config.hooks, show_clean=show_all)

    code = exit_code(entries, strict=strict)
    if code != ErrorCode.OK:
        raise typer.Exit(code=int(code))


def exit_code(entries: list[FleetEntry], *, strict: bool) -> ErrorCode:
    """Map scan results to the process exit code."""
    summary = get_summary(entries)
    if summary["errors"]:
        return ErrorCode.REPO_ERROR
    if strict and summary["total"] != summary["clean"]:
        return ErrorCode.FINDINGS
    return ErrorCode.OK
