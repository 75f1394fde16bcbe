from __future__ import annotations

from .api import (
    send_console,
    send_current_plot,
    send_file,
    send_formula,
    send_message,
    send_structured_plot,
    send_values,
)
from .capture import (
    capture_console,
    capture_current_plot,
    capture_structured_plot,
    render_formula,
    serialize_values,
)
from .config import (
    config_get,
    get_default_username,
    get_default_webhook,
    load_config,
    set_default_username,
    set_default_webhook,
)
from .connections import (
    clear_default_connection,
    create_connection,
    export_connections,
    get_default_connection,
    import_connections,
    resolve_connection,
    set_default_connection,
)
from .constants import DEFAULT_CHUNK_LEN, DISCORD_HARD_LIMIT, DISCORDR_CONFIG_PATH
from .errors import (
    DiscordrError,
    EmptyInput,
    FileNotFound,
    InvalidArgument,
    NoPlotAvailable,
    NotConfigured,
    NoValuesProvided,
    TransportError,
)
from .model import BinaryPayload, Connection, DispatchResult, FilePayload, Payload, TextPayload
from .rendering import chunk_text, iter_chunks, wrap_code_block
from .webhook_client import WebhookClient

__all__ = [
    "DEFAULT_CHUNK_LEN",
    "DISCORDR_CONFIG_PATH",
    "DISCORD_HARD_LIMIT",
    "BinaryPayload",
    "Connection",
    "DiscordrError",
    "DispatchResult",
    "EmptyInput",
    "FileNotFound",
    "FilePayload",
    "InvalidArgument",
    "NoPlotAvailable",
    "NoValuesProvided",
    "NotConfigured",
    "Payload",
    "TextPayload",
    "TransportError",
    "WebhookClient",
    "capture_console",
    "capture_current_plot",
    "capture_structured_plot",
    "chunk_text",
    "clear_default_connection",
    "config_get",
    "create_connection",
    "export_connections",
    "get_default_connection",
    "get_default_username",
    "get_default_webhook",
    "import_connections",
    "iter_chunks",
    "load_config",
    "render_formula",
    "resolve_connection",
    "send_console",
    "send_current_plot",
    "send_file",
    "send_formula",
    "send_message",
    "send_structured_plot",
    "send_values",
    "serialize_values",
    "set_default_connection",
    "set_default_username",
    "set_default_webhook",
    "wrap_code_block",
]
