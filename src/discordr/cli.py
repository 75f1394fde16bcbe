from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, List, NoReturn, Optional

import typer

from .connections import (
    create_connection,
    export_connections,
    import_connections,
    resolve_connection,
)
from .errors import DiscordrError, InvalidArgument, NotConfigured
from .model import Connection, DispatchResult, FilePayload
from .webhook_client import WebhookClient

app = typer.Typer(help="Send messages and files to a Discord channel webhook.")


def _webhook_opt() -> Any:
    return typer.Option(None, "--webhook", help="Webhook URL (defaults to DISCORDR_WEBHOOK or the config file).")


def _username_opt() -> Any:
    return typer.Option(None, "--username", help="Display name (defaults to DISCORD_USERNAME).")


def _connections_opt() -> Any:
    return typer.Option(None, "--connections", help="CSV file of saved connections. Not combinable with --webhook or --username.")


def _server_opt() -> Any:
    return typer.Option(None, "--server", help="Server label; with --connections, picks the saved row.")


def _channel_opt() -> Any:
    return typer.Option(None, "--channel", help="Channel label; with --connections, picks the saved row.")


def _select(conns: List[Connection], server: Optional[str], channel: Optional[str]) -> Connection:
    matches = [
        c
        for c in conns
        if (server is None or c.server_label == server)
        and (channel is None or c.channel_label == channel)
    ]
    if not matches:
        raise NotConfigured("no saved connection matches --server/--channel")
    return matches[0]


def _connection(
    webhook: Optional[str],
    username: Optional[str],
    connections: Optional[Path],
    server: Optional[str],
    channel: Optional[str],
) -> Connection:
    if connections is not None:
        if webhook or username:
            raise InvalidArgument("--connections cannot be combined with --webhook or --username")
        return _select(import_connections(connections), server, channel)
    if webhook:
        return create_connection(webhook, username, server, channel)
    conn = resolve_connection()
    if username or server or channel:
        conn = create_connection(
            conn.webhook_url,
            username or conn.username,
            server or conn.server_label,
            channel or conn.channel_label,
        )
    return conn


def _report(results: List[DispatchResult]) -> None:
    failed = False
    for res in results:
        if res.ok:
            typer.echo(str(res.status_code))
        else:
            failed = True
            typer.echo(f"{res.status_code or 'error'}: {res.error or 'no detail'}", err=True)
    if failed:
        raise typer.Exit(code=1)


def _fail(e: DiscordrError) -> NoReturn:
    typer.echo(str(e), err=True)
    raise typer.Exit(code=1)


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def message(
    text: Optional[str] = typer.Argument(None, help="Message text. If omitted, read stdin."),
    webhook: Optional[str] = _webhook_opt(),
    username: Optional[str] = _username_opt(),
    connections: Optional[Path] = _connections_opt(),
    server: Optional[str] = _server_opt(),
    channel: Optional[str] = _channel_opt(),
) -> None:
    """Send a text message."""
    if text is None:
        text = sys.stdin.read()
    try:
        conn = _connection(webhook, username, connections, server, channel)
        with WebhookClient() as client:
            res = client.send_text(conn, text)
    except DiscordrError as e:
        _fail(e)
    _report([res] if res is not None else [])


@app.command()
def console(
    webhook: Optional[str] = _webhook_opt(),
    username: Optional[str] = _username_opt(),
    connections: Optional[Path] = _connections_opt(),
    server: Optional[str] = _server_opt(),
    channel: Optional[str] = _channel_opt(),
    chunk_len: Optional[int] = typer.Option(None, "--chunk-len", help="Characters per message."),
) -> None:
    """Send stdin as code blocks, split across messages when long."""
    text = sys.stdin.read().rstrip("\n")
    try:
        conn = _connection(webhook, username, connections, server, channel)
        with WebhookClient() as client:
            results = client.send_chunked_text(conn, text, chunk_len)
    except DiscordrError as e:
        _fail(e)
    _report(results)


@app.command("file")
def send_file(
    path: Path = typer.Argument(..., help="File to upload."),
    webhook: Optional[str] = _webhook_opt(),
    username: Optional[str] = _username_opt(),
    connections: Optional[Path] = _connections_opt(),
    server: Optional[str] = _server_opt(),
    channel: Optional[str] = _channel_opt(),
) -> None:
    """Upload a file."""
    try:
        conn = _connection(webhook, username, connections, server, channel)
        with WebhookClient() as client:
            res = client.send_binary(conn, FilePayload(path))
    except DiscordrError as e:
        _fail(e)
    _report([res])


@app.command("export")
def export(
    path: Path = typer.Argument(..., help="CSV file to write."),
    webhook: Optional[str] = _webhook_opt(),
    username: Optional[str] = _username_opt(),
    server: Optional[str] = _server_opt(),
    channel: Optional[str] = _channel_opt(),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace the file instead of appending."),
) -> None:
    """Save a connection to a CSV file."""
    try:
        conn = _connection(webhook, username, None, server, channel)
        export_connections(conn, path, append=not overwrite)
    except DiscordrError as e:
        _fail(e)


@app.command("connections")
def list_connections(path: Path = typer.Argument(..., help="CSV file to read.")) -> None:
    """List saved connections."""
    try:
        conns = import_connections(path)
    except DiscordrError as e:
        _fail(e)
    for conn in conns:
        typer.echo(
            "\t".join([conn.server_label or "-", conn.channel_label or "-", conn.username, conn.webhook_url])
        )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
