"""MCP content envelope used for every tool result."""

from __future__ import annotations

import json
from typing import Any, Dict


def wrap(value: Any) -> Dict[str, Any]:
    """Render ``value`` as indented JSON in a single text content block."""
    return {"content": [{"type": "text", "text": json.dumps(value, indent=2, ensure_ascii=False)}]}


def unwrap(envelope: Dict[str, Any]) -> Any:
    """Parse the text block of an envelope produced by :func:`wrap`."""
    return json.loads(envelope["content"][0]["text"])


def is_error_payload(value: Any) -> bool:
    return isinstance(value, dict) and bool(value.get("error"))
