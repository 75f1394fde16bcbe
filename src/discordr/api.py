from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any, Callable, List, Optional

from . import capture
from .connections import resolve_connection
from .constants import FORMULA_DENSITY
from .model import Connection, DispatchResult, FilePayload
from .rendering import wrap_code_block
from .webhook_client import WebhookClient

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def _client_scope(client: Optional[WebhookClient]) -> Iterator[WebhookClient]:
    if client is not None:
        yield client
        return
    with WebhookClient() as owned:
        yield owned


def _send_file_payload(
    payload: FilePayload,
    conn: Optional[Connection],
    client: Optional[WebhookClient],
    *,
    cleanup: bool,
) -> DispatchResult:
    try:
        conn = resolve_connection(conn)
        with _client_scope(client) as c:
            return c.send_binary(conn, payload)
    finally:
        if cleanup:
            payload.path.unlink(missing_ok=True)


def send_message(
    message: str,
    conn: Optional[Connection] = None,
    client: Optional[WebhookClient] = None,
) -> Optional[DispatchResult]:
    if not message:
        logger.info("Empty message provided.")
        return None
    conn = resolve_connection(conn)
    with _client_scope(client) as c:
        return c.send_text(conn, message)


def send_file(
    filename: str | Path,
    conn: Optional[Connection] = None,
    client: Optional[WebhookClient] = None,
) -> DispatchResult:
    conn = resolve_connection(conn)
    with _client_scope(client) as c:
        return c.send_binary(conn, FilePayload(Path(filename)))


def send_current_plot(
    conn: Optional[Connection] = None,
    filename: Optional[str | Path] = None,
    client: Optional[WebhookClient] = None,
) -> DispatchResult:
    conn = resolve_connection(conn)
    payload = capture.capture_current_plot(filename)
    return _send_file_payload(payload, conn, client, cleanup=filename is None)


def send_structured_plot(
    plot: Any,
    conn: Optional[Connection] = None,
    filename: Optional[str | Path] = None,
    client: Optional[WebhookClient] = None,
) -> DispatchResult:
    conn = resolve_connection(conn)
    payload = capture.capture_structured_plot(plot, filename)
    return _send_file_payload(payload, conn, client, cleanup=filename is None)


def send_values(
    values: Mapping[str, Any],
    conn: Optional[Connection] = None,
    filename: Optional[str | Path] = None,
    client: Optional[WebhookClient] = None,
) -> Optional[DispatchResult]:
    payload = capture.serialize_values(values, filename)
    if payload is None:
        return None
    return _send_file_payload(payload, conn, client, cleanup=filename is None)


def send_formula(
    markup: str,
    conn: Optional[Connection] = None,
    filename: Optional[str | Path] = None,
    density: int = FORMULA_DENSITY,
    client: Optional[WebhookClient] = None,
) -> Optional[DispatchResult]:
    payload = capture.render_formula(markup, filename, density)
    if payload is None:
        return None
    return _send_file_payload(payload, conn, client, cleanup=filename is None)


def send_console(
    *calls: Callable[[], Any],
    conn: Optional[Connection] = None,
    client: Optional[WebhookClient] = None,
) -> Optional[List[DispatchResult]]:
    """
    Send what ``calls`` print, fenced as code.

    Output longer than one message goes out in several, a second apart.
    """
    if not calls:
        logger.info("No calls provided.")
        return None
    output = capture.capture_console(*calls).rstrip("\n")
    if not output:
        logger.info("No console output from provided functions.")
        return None
    conn = resolve_connection(conn)
    with _client_scope(client) as c:
        if len(output) > c.chunk_len:
            return c.send_chunked_text(conn, output)
        res = c.send_text(conn, wrap_code_block(output))
        return [res] if res is not None else []
