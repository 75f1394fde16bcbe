from __future__ import annotations

from typing import Optional


class DiscordrError(Exception):
    """Base discordr error."""


class InvalidArgument(DiscordrError, ValueError):
    """A required argument was empty or out of range."""


class NotConfigured(DiscordrError):
    """No default connection, username or webhook is available."""


class FileNotFound(DiscordrError, FileNotFoundError):
    """A referenced file is absent at dispatch time."""


class NoPlotAvailable(DiscordrError):
    pass


class NoValuesProvided(DiscordrError):
    pass


class EmptyInput(DiscordrError):
    pass


class TransportError(DiscordrError):
    """Network or HTTP-layer failure. Never retried."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
