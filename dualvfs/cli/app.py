from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Annotated

import typer
from result import Err
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dualvfs.config.defaults import default_config
from dualvfs.config.loader import load_config, sample_config_json
from dualvfs.models.stat import Stat
from dualvfs.services.formatting import format_size, format_timestamp
from dualvfs.services.logs import configure_logging
from dualvfs.services.notify import ConsoleNotifier
from dualvfs.services.router import Router, build_router

console = Console()


def _stat_table(path: str, stat: Stat) -> Table:
    table = Table(title=path, header_style="bold yellow")
    table.add_column("Kind")
    table.add_column("Size", justify="right")
    table.add_column("Created")
    table.add_column("Modified")
    table.add_row(
        stat.kind.value,
        format_size(stat),
        format_timestamp(stat.created_at),
        format_timestamp(stat.modified_at),
    )
    return table


def _report_missing(path: str) -> int:
    console.print(f"[yellow]No such file or directory: {escape(path)}[/]")
    return 1


def _report_failure(error: object) -> int:
    console.print(f"[red]Failed: {escape(str(error))}[/]")
    return 1


async def _execute(router: Router, path: str, action: str, text: str | None) -> int:
    if action == "stat":
        result = await router.stat(path)
        if isinstance(result, Err):
            return _report_failure(result.unwrap_err())
        stat = result.unwrap()
        if stat is None:
            return _report_missing(path)
        console.print(_stat_table(path, stat))
    elif action == "cat":
        result = await router.read_file(path)
        if isinstance(result, Err):
            return _report_failure(result.unwrap_err())
        data = result.unwrap()
        if data is None:
            return _report_missing(path)
        typer.echo(data.decode("utf-8", errors="replace"), nl=False)
    elif action == "find":
        result = await router.all_files_in(path)
        if isinstance(result, Err):
            return _report_failure(result.unwrap_err())
        for file_path in result.unwrap():
            typer.echo(file_path)
    elif action == "mkdir":
        result = await router.create_dir(path)
        if isinstance(result, Err):
            return _report_failure(result.unwrap_err())
        console.print(f"[green]Created directory {escape(path)}[/]")
    elif action == "write":
        data = (text or "").encode("utf-8")
        result = await router.write_file(path, data)
        if isinstance(result, Err):
            return _report_failure(result.unwrap_err())
        console.print(f"[green]Wrote {len(data):,} bytes to {escape(path)}[/]")
    elif action == "delete":
        result = await router.delete(path)
        if isinstance(result, Err):
            return _report_failure(result.unwrap_err())
        console.print(f"[green]Deleted {escape(path)}[/]")
    else:
        result = await router.read_dir(path)
        if isinstance(result, Err):
            return _report_failure(result.unwrap_err())
        entries = result.unwrap()
        if entries is None:
            return _report_missing(path)
        for name in sorted(entries):
            typer.echo(name)
    return 0


def run(
    path: Annotated[str, typer.Argument(help="Logical path; prefix with 'workspace/' for the workspace store.")] = ".",
    stat: Annotated[bool, typer.Option("--stat", "-s", help="Show entry metadata.")] = False,
    cat: Annotated[bool, typer.Option("--cat", "-c", help="Print file contents.")] = False,
    find: Annotated[bool, typer.Option("--find", "-f", help="List all files below PATH.")] = False,
    mkdir: Annotated[bool, typer.Option("--mkdir", help="Create PATH and missing parents.")] = False,
    delete: Annotated[bool, typer.Option("--delete", help="Delete PATH and everything below it.")] = False,
    write: Annotated[str | None, typer.Option("--write", help="Write TEXT to PATH.")] = None,
    root: Annotated[str | None, typer.Option("--root", "-r", help="Override the repository storage root.")] = None,
    watch: Annotated[bool, typer.Option("--watch", "-w", help="Print change events.")] = False,
    log_level: Annotated[str | None, typer.Option("--log-level", help="Logging level.")] = None,
    sample_config: Annotated[bool, typer.Option("--sample-config", help="Print sample config JSON.")] = False,
) -> None:
    if sample_config:
        console.print(sample_config_json())
        raise typer.Exit(0)

    actions = [
        name
        for name, enabled in (
            ("stat", stat),
            ("cat", cat),
            ("find", find),
            ("mkdir", mkdir),
            ("delete", delete),
            ("write", write is not None),
        )
        if enabled
    ]
    if len(actions) > 1:
        console.print(f"[red]Choose one action, got: {', '.join(actions)}.[/]")
        raise typer.Exit(2)
    action = actions[0] if actions else "list"

    config_result = load_config()
    if isinstance(config_result, Err):
        console.print(f"[yellow]{config_result.unwrap_err()} Using defaults.[/]")
        config = default_config()
    else:
        config = config_result.unwrap()

    overrides: dict[str, object] = {}
    if root is not None:
        overrides["storage_root"] = root
    if log_level is not None:
        overrides["log_level"] = log_level.upper()
    if overrides:
        config = replace(config, **overrides)

    configure_logging(config.log_level, console=console)

    try:
        router = build_router(config, notifier=ConsoleNotifier(console) if watch else None)
    except OSError as exc:
        console.print(f"[red]Cannot open storage root {escape(config.storage_root)}: {escape(str(exc))}[/]")
        raise typer.Exit(1) from exc

    code = asyncio.run(_execute(router, path, action, write))
    if code:
        raise typer.Exit(code)


def cli() -> None:
    typer.run(run)


if __name__ == "__main__":
    cli()
