from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Dict, Optional

from .config import config_get, get_default_username, get_default_webhook, load_config
from .constants import CONNECTION_FIELDS
from .errors import FileNotFound, InvalidArgument, NotConfigured
from .model import Connection

logger = logging.getLogger(__name__)

# Process-wide default. Last write wins; reads and writes are not atomic.
_default_connection: Connection | None = None


def create_connection(
    webhook_url: str,
    username: Optional[str] = None,
    server_label: Optional[str] = None,
    channel_label: Optional[str] = None,
    *,
    set_default: bool = False,
) -> Connection:
    if username is None:
        username = get_default_username(verbose=False)
    if not username:
        raise InvalidArgument("Zero character username provided.")
    conn = Connection(
        webhook_url=webhook_url,
        username=username,
        server_label=server_label,
        channel_label=channel_label,
    )
    if set_default:
        set_default_connection(conn)
    return conn


def set_default_connection(conn: Connection) -> None:
    global _default_connection
    if _default_connection is not None and _default_connection != conn:
        logger.debug("replacing default connection %s", _default_connection.describe())
    _default_connection = conn


def get_default_connection() -> Connection:
    if _default_connection is None:
        raise NotConfigured("No default discord connection set.")
    return _default_connection


def peek_default_connection() -> Connection | None:
    return _default_connection


def clear_default_connection() -> None:
    global _default_connection
    _default_connection = None


def resolve_connection(
    conn: Optional[Connection] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Connection:
    """
    Pick the connection for a send call.

    Order: explicit argument, default connection, legacy environment
    variables, then the config file.
    """
    if conn is not None:
        return conn
    if _default_connection is not None:
        return _default_connection

    webhook_url = get_default_webhook(verbose=False)
    username = get_default_username(verbose=False)
    if webhook_url and username:
        logger.debug("using legacy environment connection")
        return Connection(webhook_url=webhook_url, username=username)

    if config is None:
        config = load_config()
    webhook_url = config_get(config, "webhook") or webhook_url
    username = config_get(config, "username") or username
    if webhook_url and username:
        logger.debug("using connection from config file")
        return Connection(
            webhook_url=str(webhook_url),
            username=str(username),
            server_label=config_get(config, "server_name"),
            channel_label=config_get(config, "channel_name"),
        )
    raise NotConfigured("No default discord connection set.")


def _to_row(conn: Connection) -> Dict[str, str]:
    return {
        "server_name": conn.server_label or "",
        "channel_name": conn.channel_label or "",
        "username": conn.username,
        "webhook": conn.webhook_url,
    }


def _from_row(row: Dict[str, str]) -> Connection:
    return create_connection(
        webhook_url=row.get("webhook") or "",
        username=row.get("username") or "",
        server_label=row.get("server_name") or None,
        channel_label=row.get("channel_name") or None,
    )


def _read_rows(path: Path) -> list[Dict[str, str]]:
    with path.open(newline="", encoding="utf-8") as f:
        return [dict(row) for row in csv.DictReader(f)]


def export_connections(
    conns: Connection | Iterable[Connection],
    path: str | Path,
    append: bool = True,
) -> None:
    """
    Write connections to a CSV file.

    With ``append`` and an existing file, the existing rows are kept and the
    new ones follow them. Otherwise the file is replaced.
    """
    path = Path(path)
    new_rows = [_to_row(c) for c in ([conns] if isinstance(conns, Connection) else conns)]

    rows: list[Dict[str, str]] = []
    if append and path.exists():
        rows = _read_rows(path)
    rows.extend(new_rows)

    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(CONNECTION_FIELDS), extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)
    logger.info("exported %d connection(s) to %s", len(new_rows), path)


def import_connections(path: str | Path) -> list[Connection]:
    path = Path(path)
    if not path.exists():
        raise FileNotFound(f"connection file does not exist: {path}")
    return [_from_row(row) for row in _read_rows(path)]
