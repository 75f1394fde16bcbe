from __future__ import annotations

from pathlib import Path

DISCORD_HARD_LIMIT = 2000
DEFAULT_CHUNK_LEN = 1990  # leave room for the code fence
CODE_FENCE = "```"
CHUNK_PAUSE_S = 1.0
DEFAULT_TIMEOUT_S = 30.0
FORMULA_DENSITY = 250
TEMP_PREFIX = "discordr"

USERNAME_ENV = "DISCORD_USERNAME"
LEGACY_USERNAME_ENV = "DISCORDR_USERNAME"
LEGACY_WEBHOOK_ENV = "DISCORDR_WEBHOOK"

DISCORDR_CONFIG_PATH = Path.home() / ".config" / "discordr" / "config.toml"

CONNECTION_FIELDS = ("server_name", "channel_name", "username", "webhook")
