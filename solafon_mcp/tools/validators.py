"""Shared validation helpers for Solafon MCP tools."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit

# Any RFC 4122-shaped UUID; the version nibble is not checked.
UUID_REGEX = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
UUID_PATTERN = UUID_REGEX.pattern


def is_valid_uuid(value: Optional[str]) -> bool:
    """Format check for Solafon ids (conversations, messages, users)."""
    if not value or not isinstance(value, str):
        return False
    return bool(UUID_REGEX.fullmatch(value))


def is_valid_url(value: Optional[str]) -> bool:
    """Accept absolute URLs with a scheme and a host."""
    if not value or not isinstance(value, str):
        return False
    if any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc)
