"""Bot API tools: messages, conversations, users and app settings."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from solafon_mcp.config import SolafonConfig, default_config
from solafon_mcp.envelope import wrap
from solafon_mcp.solafon_api import default_client

logger = logging.getLogger(__name__)

APP_ID_ERROR = "Could not determine app ID. Check your bot token."


def build_message_content(
    message_type: str,
    *,
    text: Optional[str] = None,
    image_url: Optional[str] = None,
    buttons: Optional[List[Dict[str, Any]]] = None,
    cards: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """
    Assemble a Solafon message content object.

    ``type`` is always present. ``text`` and ``imageUrl`` are added when
    non-empty; ``buttons`` and ``cards`` whenever they were supplied.
    """
    content: Dict[str, Any] = {"type": message_type}
    if text:
        content["text"] = text
    if image_url:
        content["imageUrl"] = image_url
    if buttons is not None:
        content["buttons"] = buttons
    if cards is not None:
        content["cards"] = cards
    return content


async def resolve_app_id(client=default_client, config: Optional[SolafonConfig] = None) -> Optional[str]:
    """Return the configured app id, or look it up from ``/api/bot/me``."""
    if config is None:
        config = getattr(client, "config", None) or default_config
    if config.app_id:
        return config.app_id
    bot_info = await client.fetch_bot_info()
    if not isinstance(bot_info, dict):
        return None
    app_id = bot_info.get("id")
    if not app_id:
        logger.warning("bot identity lookup returned no app id")
        return None
    return str(app_id)


async def get_bot_info(*, client=default_client) -> Dict[str, Any]:
    """Get the bot app (name, description, status, webhook URL)."""
    return wrap(await client.fetch_bot_info())


async def send_message(
    *,
    conversation_id: str,
    message_type: str = "text",
    text: Optional[str] = None,
    image_url: Optional[str] = None,
    buttons: Optional[List[Dict[str, Any]]] = None,
    cards: Optional[List[Dict[str, Any]]] = None,
    client=default_client,
) -> Dict[str, Any]:
    content = build_message_content(
        message_type, text=text, image_url=image_url, buttons=buttons, cards=cards
    )
    return wrap(await client.send_message(conversation_id, content))


async def edit_message(
    *,
    message_id: str,
    message_type: str = "text",
    text: Optional[str] = None,
    buttons: Optional[List[Dict[str, Any]]] = None,
    client=default_client,
) -> Dict[str, Any]:
    content = build_message_content(message_type, text=text, buttons=buttons)
    return wrap(await client.edit_message(message_id, content))


async def delete_message(*, message_id: str, client=default_client) -> Dict[str, Any]:
    return wrap(await client.delete_message(message_id))


async def list_conversations(
    *, limit: int = 20, offset: int = 0, client=default_client
) -> Dict[str, Any]:
    return wrap(await client.fetch_conversations(limit=limit, offset=offset))


async def get_conversation_messages(
    *,
    conversation_id: str,
    limit: int = 50,
    before: Optional[str] = None,
    client=default_client,
) -> Dict[str, Any]:
    return wrap(
        await client.fetch_conversation_messages(conversation_id, limit=limit, before=before)
    )


async def get_user(*, user_id: str, client=default_client) -> Dict[str, Any]:
    return wrap(await client.fetch_user(user_id))


async def set_webhook(
    *,
    url: str,
    events: Optional[List[str]] = None,
    client=default_client,
    config: Optional[SolafonConfig] = None,
) -> Dict[str, Any]:
    """
    Point the bot's webhook at ``url``.

    The app id is resolved first; without one no update request is sent and an
    ``{"error": ...}`` payload is returned instead.
    """
    app_id = await resolve_app_id(client, config)
    if not app_id:
        return wrap({"error": APP_ID_ERROR})
    return wrap(await client.update_webhook(app_id, url=url, events=events))


async def set_welcome_message(
    *,
    text: str,
    buttons: Optional[List[Dict[str, Any]]] = None,
    client=default_client,
    config: Optional[SolafonConfig] = None,
) -> Dict[str, Any]:
    """Set the greeting shown when a user opens a conversation with the bot."""
    app_id = await resolve_app_id(client, config)
    if not app_id:
        return wrap({"error": APP_ID_ERROR})
    content: Dict[str, Any] = {"type": "text", "text": text}
    if buttons is not None:
        content["buttons"] = buttons
    return wrap(await client.update_welcome_message(app_id, content))
