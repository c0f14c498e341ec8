from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from fleetcheck.core.config import CONFIG_FILENAME, Config, load_config, load_config_or_default
from fleetcheck.core.errors import ErrorCode
from fleetcheck.core.result import Err
from fleetcheck.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: Config
    console: ConsoleProtocol


def build_context(
    root: Path,
    *,
    config_path: Path | None = None,
    remote: str | None = None,
    fetch: bool | None = None,
    no_color: bool = False,
) -> CLIContext:
    try:
        root = root.expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid root: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not root.is_dir():
        typer.echo(f"error: not a directory: {root}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if config_path is not None:
        config_result = load_config(config_path.expanduser())
    else:
        config_result = load_config_or_default(root / CONFIG_FILENAME)

    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(
        root=root,
        config=config_result.value.with_overrides(remote_name=remote, fetch=fetch),
        console=RichConsole(no_color=no_color),
    )
