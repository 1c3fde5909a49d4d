"""
Configuration helpers for the Solafon MCP server.

This module centralizes base URL selection, bot token loading, the outbound
HTTP timeout, and logging settings. No secrets are stored in the repository;
the bot token is read from environment or a local file if present.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Default connection settings
DEFAULT_BASE_URL = "https://api.solafon.com"
DEFAULT_HTTP_TIMEOUT = 30.0

# Bot token handling
BOT_TOKEN_ENV_VAR = "SOLAFON_BOT_TOKEN"
BOT_TOKEN_FILE_ENV_VAR = "SOLAFON_BOT_TOKEN_FILE"
APP_ID_ENV_VAR = "SOLAFON_APP_ID"


def _load_base_url() -> str:
    raw = os.getenv("SOLAFON_API_URL") or DEFAULT_BASE_URL
    return raw.strip().rstrip("/")


def _load_timeout() -> float:
    raw_timeout = os.getenv("SOLAFON_HTTP_TIMEOUT")
    if raw_timeout:
        try:
            return float(raw_timeout)
        except ValueError:
            return DEFAULT_HTTP_TIMEOUT
    return DEFAULT_HTTP_TIMEOUT


def load_bot_token() -> Optional[str]:
    """
    Load the Solafon bot token from environment or a local file.

    Returns:
        The token string if available, otherwise None. The token is never logged
        or returned to callers.
    """
    env_token = os.getenv(BOT_TOKEN_ENV_VAR)
    if env_token and env_token.strip():
        return env_token.strip()

    token_path = os.getenv(BOT_TOKEN_FILE_ENV_VAR)
    if token_path:
        path = Path(token_path)
        if path.is_file():
            return path.read_text(encoding="utf-8").strip() or None

    return None


def load_app_id() -> Optional[str]:
    """Return a pinned app id, or None to resolve it from the bot token."""
    raw = os.getenv(APP_ID_ENV_VAR)
    if raw and raw.strip():
        return raw.strip()
    return None


BASE_URL = _load_base_url()
HTTP_TIMEOUT = _load_timeout()
LOG_LEVEL = os.getenv("SOLAFON_MCP_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("SOLAFON_MCP_LOG_FORMAT", "json")  # json or plain


@dataclass(slots=True)
class SolafonConfig:
    """Runtime configuration for Solafon API access."""

    base_url: str = BASE_URL
    timeout: float = HTTP_TIMEOUT
    bot_token: Optional[str] = load_bot_token()
    app_id: Optional[str] = load_app_id()
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT

    def __repr__(self) -> str:
        token = "***" if self.bot_token else None
        return (
            f"SolafonConfig(base_url={self.base_url!r}, timeout={self.timeout!r}, "
            f"bot_token={token!r}, app_id={self.app_id!r}, log_level={self.log_level!r}, "
            f"log_format={self.log_format!r})"
        )


default_config = SolafonConfig()
