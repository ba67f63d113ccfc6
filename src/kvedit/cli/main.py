"""CLI for kvedit: serve the API, browse and edit files against a server."""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import click
import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from kvedit.client.api_client import APIError, KVEditClient
from kvedit.core.config import AppSettings, ClientConfig
from kvedit.editor.session import EditorSession, LoadStatus
from kvedit.grouping import KeyGroup
from kvedit.hooks import setup_logging
from kvedit.keys import sanitize_key
from kvedit.snapshots.cache import SnapshotCache

app = typer.Typer(name="kvedit", help="Key-value text file editor over object storage")
snapshots_app = typer.Typer(help="Inspect and restore local save snapshots")
app.add_typer(snapshots_app, name="snapshots")

console = Console()
err_console = Console(stderr=True)


def _client_config(base_url: Optional[str], token: Optional[str]) -> ClientConfig:
    """Build client settings, overriding env defaults with CLI flags."""
    overrides: dict = {}
    if base_url:
        overrides["base_url"] = base_url
    if token:
        overrides["token"] = token
    return ClientConfig(**overrides)


def _build_session(config: ClientConfig) -> EditorSession:
    client = KVEditClient(config.base_url, config.token, timeout=config.timeout)
    snapshots = SnapshotCache(config.snapshot_dir, max_entries=config.snapshot_max_entries)
    return EditorSession(client, snapshots)


def _fail(error: APIError) -> None:
    err_console.print(f"[red]{error}[/red]")
    raise typer.Exit(code=1)


def _render_groups(groups: list[KeyGroup], current: str = "") -> Tree:
    tree = Tree("[bold]files[/bold]")
    for group in groups:
        branch = tree.add(f"[bold]/{group.prefix}[/bold]")
        for name, key in zip(group.filenames, group.keys()):
            branch.add(f"[underline]{name}[/underline]" if key == current else name)
    return tree


_BASE_URL = typer.Option(None, "--base-url", help="Server URL (KVEDIT_CLIENT_BASE_URL)")
_TOKEN = typer.Option(None, "--token", help="Shared token (KVEDIT_CLIENT_TOKEN)")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address"),
    port: Optional[int] = typer.Option(None, help="Bind port"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from kvedit.api.app import create_app

    settings = AppSettings()
    uvicorn.run(
        create_app(settings),
        host=host or settings.api.host,
        port=port or settings.api.port,
        log_config=None,
    )


@app.command("ls")
def list_files(
    prefix: str = typer.Argument("", help="Only keys starting with this prefix"),
    flat: bool = typer.Option(False, "--flat", help="One key per line"),
    base_url: Optional[str] = _BASE_URL,
    token: Optional[str] = _TOKEN,
) -> None:
    """List keys grouped by directory prefix."""
    session = _build_session(_client_config(base_url, token))
    try:
        session.refresh()
    except APIError as e:
        _fail(e)

    keys = [k for k in session.keys if k.startswith(prefix)]
    if flat:
        for key in sorted(keys):
            typer.echo(key)
        return
    session.keys = keys
    console.print(_render_groups(session.groups()))


@app.command()
def cat(
    key: str = typer.Argument(..., help="Key to print"),
    base_url: Optional[str] = _BASE_URL,
    token: Optional[str] = _TOKEN,
) -> None:
    """Print a file's body."""
    session = _build_session(_client_config(base_url, token))
    if session.select(key) is LoadStatus.FAILED:
        _fail(session.error)
    typer.echo(session.body, nl=False)


@app.command()
def put(
    key: str = typer.Argument(..., help="Key to write"),
    source: Optional[Path] = typer.Argument(None, help="File to upload (stdin when omitted)"),
    base_url: Optional[str] = _BASE_URL,
    token: Optional[str] = _TOKEN,
) -> None:
    """Create or overwrite a file."""
    body = source.read_text(encoding="utf-8") if source else sys.stdin.read()
    session = _build_session(_client_config(base_url, token))
    session.current_key = key.strip("/")
    session.edit(body)
    try:
        session.save()
    except APIError as e:
        _fail(e)
    console.print(f"[green]Saved /{session.current_key}[/green]")


@app.command()
def edit(
    key: str = typer.Argument(..., help="Key to edit (created on first save)"),
    base_url: Optional[str] = _BASE_URL,
    token: Optional[str] = _TOKEN,
) -> None:
    """Open a file in $EDITOR and save it when it changed."""
    session = _build_session(_client_config(base_url, token))
    if session.select(key) is LoadStatus.FAILED:
        if session.error is None or session.error.status_code != 404:
            _fail(session.error)
        console.print(f"[yellow]/{session.current_key} does not exist yet[/yellow]")

    edited = click.edit(session.body, extension=".txt", require_save=True)
    if edited is None:
        console.print("No changes")
        return
    session.edit(edited)
    if not session.dirty and session.status is LoadStatus.LOADED:
        console.print("No changes")
        return
    try:
        session.save()
    except APIError as e:
        _fail(e)
    console.print(f"[green]Saved /{session.current_key}[/green]")


@app.command()
def mv(
    src: str = typer.Argument(..., help="Current key"),
    dst: str = typer.Argument(..., help="New key"),
    base_url: Optional[str] = _BASE_URL,
    token: Optional[str] = _TOKEN,
) -> None:
    """Rename a file."""
    session = _build_session(_client_config(base_url, token))
    session.current_key = src.strip("/")
    try:
        session.rename(dst)
    except APIError as e:
        _fail(e)
    console.print(f"[green]Moved /{src.strip('/')} -> /{session.current_key}[/green]")


@app.command()
def rm(
    key: str = typer.Argument(..., help="Key to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    base_url: Optional[str] = _BASE_URL,
    token: Optional[str] = _TOKEN,
) -> None:
    """Delete a file."""
    session = _build_session(_client_config(base_url, token))
    session.current_key = key.strip("/")

    def confirm() -> bool:
        return yes or typer.confirm(f"Are you sure you want to delete /{session.current_key}?")

    try:
        deleted = session.delete(confirm)
    except APIError as e:
        _fail(e)
    if deleted:
        console.print(f"[green]Deleted /{key.strip('/')}[/green]")
    else:
        console.print("Cancelled")


@app.command("token-url")
def token_url(
    token: str = typer.Argument(..., help="Token to store in the browser cookie"),
    base_url: Optional[str] = _BASE_URL,
) -> None:
    """Print the URL that sets the auth cookie in a browser."""
    config = _client_config(base_url, None)
    typer.echo(f"{config.base_url.rstrip('/')}/set-token/{quote(token, safe='')}")


def _snapshot_cache() -> SnapshotCache:
    config = ClientConfig()
    return SnapshotCache(config.snapshot_dir, max_entries=config.snapshot_max_entries)


@snapshots_app.command("list")
def snapshots_list(
    key: Optional[str] = typer.Argument(None, help="Only snapshots of this key"),
) -> None:
    """List local snapshots, newest first."""
    cache = _snapshot_cache()
    entries = cache.entries()
    if key:
        wanted = sanitize_key(key.strip("/"))
        entries = [e for e in entries if e.sanitized_key == wanted]

    table = Table(title=f"Snapshots in {cache.directory}")
    table.add_column("Name", style="cyan")
    table.add_column("Saved at (UTC)", style="green")
    table.add_column("Size", justify="right")
    for entry in reversed(entries):
        saved_at = datetime.fromtimestamp(entry.timestamp_ms / 1000, tz=timezone.utc)
        table.add_row(entry.name, saved_at.strftime("%Y-%m-%d %H:%M:%S"), str(entry.path.stat().st_size))
    console.print(table)


@snapshots_app.command("show")
def snapshots_show(name: str = typer.Argument(..., help="Snapshot file name")) -> None:
    """Print a snapshot's body."""
    try:
        typer.echo(_snapshot_cache().read(name), nl=False)
    except FileNotFoundError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)


@snapshots_app.command("restore")
def snapshots_restore(
    key: str = typer.Argument(..., help="Key to restore"),
    name: Optional[str] = typer.Option(None, "--name", help="Snapshot to use (default: newest for KEY)"),
    base_url: Optional[str] = _BASE_URL,
    token: Optional[str] = _TOKEN,
) -> None:
    """Upload a local snapshot back to the server."""
    session = _build_session(_client_config(base_url, token))
    cache = _snapshot_cache()
    if name is None:
        entry = cache.latest(key.strip("/"))
        if entry is None:
            err_console.print(f"[red]No snapshot for /{key.strip('/')}[/red]")
            raise typer.Exit(code=1)
        name = entry.name

    try:
        body = cache.read(name)
    except FileNotFoundError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    session.current_key = key.strip("/")
    session.edit(body)
    try:
        session.save()
    except APIError as e:
        _fail(e)
    console.print(f"[green]Restored /{session.current_key} from {name}[/green]")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v")) -> None:
    """kvedit command line."""
    settings = AppSettings()
    if verbose:
        settings.observability.log_level = "DEBUG"
    setup_logging(settings.observability)


if __name__ == "__main__":
    app()
