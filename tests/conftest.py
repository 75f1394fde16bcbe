from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from discordr import config, connections
from discordr.webhook_client import WebhookClient


@pytest.fixture(autouse=True)
def _isolated_defaults(tmp_path, monkeypatch) -> None:
    for name in ("DISCORD_USERNAME", "DISCORDR_USERNAME", "DISCORDR_WEBHOOK"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "DISCORDR_CONFIG_PATH", tmp_path / "no-config.toml")
    connections.clear_default_connection()
    yield
    connections.clear_default_connection()


class Recorder:
    """Collects requests sent through an httpx.MockTransport."""

    def __init__(self, status_codes: list[int] | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.sleeps: list[float] = []
        self._status_codes = list(status_codes or [])

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self._status_codes:
            return httpx.Response(self._status_codes.pop(0))
        if request.headers.get("content-type", "").startswith("multipart/"):
            return httpx.Response(200, json={"id": "1"})
        return httpx.Response(204)

    def client(self, **kwargs: Any) -> WebhookClient:
        return WebhookClient(
            transport=httpx.MockTransport(self.handler),
            sleep=self.sleeps.append,
            **kwargs,
        )

    def json_bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
