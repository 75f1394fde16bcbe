from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .errors import InvalidArgument


@dataclass(frozen=True, slots=True)
class Connection:
    """Webhook endpoint plus the display name attached to outgoing messages."""

    webhook_url: str
    username: str
    server_label: str | None = None
    channel_label: str | None = None

    def __post_init__(self) -> None:
        if not self.webhook_url:
            raise InvalidArgument("Empty webhook URL provided.")
        if not self.username:
            raise InvalidArgument("Zero character username provided.")
        # labels are optional; "" and None mean the same thing
        if self.server_label == "":
            object.__setattr__(self, "server_label", None)
        if self.channel_label == "":
            object.__setattr__(self, "channel_label", None)

    def describe(self) -> str:
        labels = [label for label in (self.server_label, self.channel_label) if label]
        where = "/".join(labels) if labels else self.webhook_url
        return f"{self.username}@{where}"


@dataclass(frozen=True, slots=True)
class TextPayload:
    content: str


@dataclass(frozen=True, slots=True)
class FilePayload:
    path: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))

    @property
    def filename(self) -> str:
        return self.path.name


@dataclass(frozen=True, slots=True)
class BinaryPayload:
    data: bytes
    filename: str


Payload = Union[TextPayload, FilePayload, BinaryPayload]


@dataclass(frozen=True, slots=True)
class DispatchResult:
    status_code: int | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300
