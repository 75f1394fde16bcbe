from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import (
    DISCORDR_CONFIG_PATH,
    LEGACY_USERNAME_ENV,
    LEGACY_WEBHOOK_ENV,
    USERNAME_ENV,
)

logger = logging.getLogger(__name__)


def _load_toml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    import tomllib

    return tomllib.loads(path.read_text(encoding="utf-8"))


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    cfg_path = Path(path) if path else DISCORDR_CONFIG_PATH
    return _load_toml(cfg_path)


def config_get(config: Dict[str, Any], key: str) -> Any:
    if key in config:
        return config[key]
    nested = config.get("discord")
    if isinstance(nested, dict) and key in nested:
        return nested[key]
    return None


def set_default_username(username: str) -> None:
    existing = get_default_username(verbose=False)
    if not username:
        logger.info("Default username is set to an empty string.")
    elif existing and existing != username:
        logger.info("Overwriting existing username: %s", existing)
    os.environ[USERNAME_ENV] = username


def get_default_username(verbose: bool = True) -> str:
    """
    Return the default username, or "" when none is set.

    Falls back to the legacy DISCORDR_USERNAME variable.
    """
    username = os.environ.get(USERNAME_ENV) or os.environ.get(LEGACY_USERNAME_ENV, "")
    if not username and verbose:
        logger.info(
            "Default discordr username not set. Use set_default_username to set "
            "a default username as an environment variable."
        )
    return username


def set_default_webhook(webhook_url: str) -> None:
    existing = get_default_webhook(verbose=False)
    if existing and existing != webhook_url:
        logger.info("Overwriting existing webhook: %s", existing)
    os.environ[LEGACY_WEBHOOK_ENV] = webhook_url


def get_default_webhook(verbose: bool = True) -> str:
    webhook_url = os.environ.get(LEGACY_WEBHOOK_ENV, "")
    if not webhook_url and verbose:
        logger.info(
            "Default discordr webhook not set. Use set_default_webhook to set "
            "a default webhook as an environment variable."
        )
    return webhook_url

