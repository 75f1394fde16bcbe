from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional

import httpx

from .constants import CHUNK_PAUSE_S, DEFAULT_CHUNK_LEN, DEFAULT_TIMEOUT_S
from .errors import FileNotFound, TransportError
from .model import BinaryPayload, Connection, DispatchResult, FilePayload, Payload, TextPayload
from .rendering import chunk_text, wrap_code_block

logger = logging.getLogger(__name__)


class WebhookClient:
    """
    Minimal Discord webhook client. One POST per message, no retries.

    ``sleep`` is called between chunks of a multi-part message; swap it out
    to avoid real waits.
    """

    def __init__(
        self,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        chunk_len: int = DEFAULT_CHUNK_LEN,
        pause_s: float = CHUNK_PAUSE_S,
        sleep: Callable[[float], None] = time.sleep,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._client = httpx.Client(timeout=timeout_s, transport=transport)
        self.chunk_len = chunk_len
        self.pause_s = pause_s
        self._sleep = sleep

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "WebhookClient":
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def _post(self, conn: Connection, **kwargs: Any) -> DispatchResult:
        try:
            response = self._client.post(conn.webhook_url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"Discord webhook error for {conn.describe()}: {e}") from e

        if not response.is_success:
            body = response.text.strip().replace("\n", " ")[:200]
            logger.warning(
                "Discord webhook responded with %s for %s: %s",
                response.status_code,
                conn.describe(),
                body,
            )
            return DispatchResult(status_code=response.status_code, error=body or None)
        logger.debug("Discord webhook %s -> %s", conn.describe(), response.status_code)
        return DispatchResult(status_code=response.status_code)

    def send_text(self, conn: Connection, text: str) -> Optional[DispatchResult]:
        if not text:
            logger.info("Empty message provided.")
            return None
        params: Dict[str, Any] = {
            "content": text,
            "username": conn.username,
        }
        return self._post(conn, json=params)

    def send_binary(self, conn: Connection, payload: FilePayload | BinaryPayload) -> DispatchResult:
        if isinstance(payload, FilePayload):
            if not payload.path.is_file():
                raise FileNotFound(f"File not found: {payload.path}")
            filename = payload.filename
            data = payload.path.read_bytes()
        elif isinstance(payload, BinaryPayload):
            filename = payload.filename
            data = payload.data
        else:
            raise TypeError(f"unsupported payload: {type(payload).__name__}")
        return self._post(
            conn,
            data={"username": conn.username},
            files={"content": (filename, data)},
        )

    def send_chunked_text(
        self,
        conn: Connection,
        text: str,
        chunk_len: Optional[int] = None,
    ) -> List[DispatchResult]:
        if not text:
            logger.info("Empty message provided.")
            return []
        sent: List[DispatchResult] = []
        chunks = chunk_text(text, limit=self.chunk_len if chunk_len is None else chunk_len)
        for i, c in enumerate(chunks):
            if i:
                self._sleep(self.pause_s)
            try:
                res = self.send_text(conn, wrap_code_block(c))
            except TransportError as e:
                # keep going; the caller decides what to resend
                logger.warning("chunk %d/%d failed: %s", i + 1, len(chunks), e)
                res = DispatchResult(status_code=None, error=str(e))
            if res is not None:
                sent.append(res)
        logger.info("sent %d chunk(s) to %s", len(sent), conn.describe())
        return sent

    def send(self, conn: Connection, payload: Payload) -> List[DispatchResult]:
        if isinstance(payload, TextPayload):
            if len(payload.content) > self.chunk_len:
                return self.send_chunked_text(conn, payload.content)
            res = self.send_text(conn, payload.content)
            return [res] if res is not None else []
        if isinstance(payload, (FilePayload, BinaryPayload)):
            return [self.send_binary(conn, payload)]
        raise TypeError(f"unsupported payload: {type(payload).__name__}")
