import json

import httpx
import pytest

from solafon_mcp.config import SolafonConfig
from solafon_mcp.envelope import unwrap
from solafon_mcp.tools.bot import (
    APP_ID_ERROR,
    build_message_content,
    delete_message,
    edit_message,
    get_bot_info,
    get_conversation_messages,
    get_user,
    list_conversations,
    resolve_app_id,
    send_message,
    set_webhook,
    set_welcome_message,
)

CONVERSATION_ID = "11111111-1111-1111-1111-111111111111"
MESSAGE_ID = "22222222-2222-2222-2222-222222222222"
NO_APP_ID = SolafonConfig(app_id=None)


class StubClient:
    def __init__(self, bot_info=None, response=None):
        self.calls = []
        self._bot_info = bot_info if bot_info is not None else {"id": "app-42", "name": "Echo"}
        self._response = response if response is not None else {"ok": True}

    async def fetch_bot_info(self):
        self.calls.append(("fetch_bot_info",))
        return self._bot_info

    async def send_message(self, conversation_id, content):
        self.calls.append(("send_message", conversation_id, content))
        return self._response

    async def edit_message(self, message_id, content):
        self.calls.append(("edit_message", message_id, content))
        return self._response

    async def update_webhook(self, app_id, *, url, events=None):
        self.calls.append(("update_webhook", app_id, url, events))
        return self._response

    async def update_welcome_message(self, app_id, content):
        self.calls.append(("update_welcome_message", app_id, content))
        return self._response


def test_build_message_content_type_only():
    assert build_message_content("text") == {"type": "text"}


def test_build_message_content_skips_empty_values():
    content = build_message_content("image", text="", image_url=None)
    assert content == {"type": "image"}


def test_build_message_content_includes_supplied_fields():
    buttons = [{"id": "b1", "text": "Go", "action": "url", "url": "https://solafon.com"}]
    cards = [{"id": "c1", "title": "SOL", "buttons": buttons}]
    content = build_message_content(
        "carousel", text="Pick one", image_url="https://img.example/x.png", buttons=buttons, cards=cards
    )
    assert content == {
        "type": "carousel",
        "text": "Pick one",
        "imageUrl": "https://img.example/x.png",
        "buttons": buttons,
        "cards": cards,
    }


@pytest.mark.asyncio
async def test_send_message_scenario():
    client = StubClient(response={"id": MESSAGE_ID})
    envelope = await send_message(conversation_id=CONVERSATION_ID, message_type="text", text="hi", client=client)
    assert client.calls == [("send_message", CONVERSATION_ID, {"type": "text", "text": "hi"})]
    assert unwrap(envelope) == {"id": MESSAGE_ID}


@pytest.mark.asyncio
async def test_edit_message_builds_content():
    client = StubClient()
    await edit_message(message_id=MESSAGE_ID, text="edited", client=client)
    assert client.calls == [("edit_message", MESSAGE_ID, {"type": "text", "text": "edited"})]


@pytest.mark.asyncio
async def test_simple_bot_tools_over_http(mock_api):
    api = mock_api(lambda request: httpx.Response(200, json={"path": request.url.path}))

    assert unwrap(await get_bot_info(client=api.client)) == {"path": "/api/bot/me"}
    assert unwrap(await delete_message(message_id=MESSAGE_ID, client=api.client)) == {
        "path": f"/api/bot/messages/{MESSAGE_ID}"
    }
    assert api.last.method == "DELETE"
    assert unwrap(await get_user(user_id=MESSAGE_ID, client=api.client)) == {"path": f"/api/bot/users/{MESSAGE_ID}"}

    await list_conversations(client=api.client)
    assert dict(api.last.url.params) == {"limit": "20", "offset": "0"}

    await get_conversation_messages(conversation_id=CONVERSATION_ID, client=api.client)
    assert dict(api.last.url.params) == {"limit": "50"}


@pytest.mark.asyncio
async def test_resolve_app_id_prefers_configured_id():
    client = StubClient()
    assert await resolve_app_id(client, SolafonConfig(app_id="pinned")) == "pinned"
    assert client.calls == []


@pytest.mark.asyncio
async def test_resolve_app_id_handles_non_object_response():
    assert await resolve_app_id(StubClient(bot_info=["not", "a", "dict"]), NO_APP_ID) is None
    assert await resolve_app_id(StubClient(bot_info={"status": 401, "body": "unauthorized"}), NO_APP_ID) is None


@pytest.mark.asyncio
async def test_set_webhook_two_step():
    client = StubClient()
    envelope = await set_webhook(url="https://bot.example.com/hook", events=["message"], client=client, config=NO_APP_ID)
    assert client.calls == [
        ("fetch_bot_info",),
        ("update_webhook", "app-42", "https://bot.example.com/hook", ["message"]),
    ]
    assert unwrap(envelope) == {"ok": True}


@pytest.mark.asyncio
async def test_set_webhook_without_app_id_sends_no_put():
    client = StubClient(bot_info={"error": "invalid token"})
    envelope = await set_webhook(url="https://bot.example.com/hook", client=client, config=NO_APP_ID)
    assert unwrap(envelope) == {"error": APP_ID_ERROR}
    assert client.calls == [("fetch_bot_info",)]


@pytest.mark.asyncio
async def test_set_welcome_message_two_step():
    client = StubClient()
    buttons = [{"id": "start", "text": "Start", "action": "callback", "payload": "start"}]
    await set_welcome_message(text="Welcome!", buttons=buttons, client=client, config=NO_APP_ID)
    assert client.calls[-1] == (
        "update_welcome_message",
        "app-42",
        {"type": "text", "text": "Welcome!", "buttons": buttons},
    )


@pytest.mark.asyncio
async def test_set_welcome_message_without_app_id():
    client = StubClient(bot_info={"name": "no id here"})
    envelope = await set_welcome_message(text="Welcome!", client=client, config=NO_APP_ID)
    assert unwrap(envelope) == {"error": APP_ID_ERROR}
    assert [call[0] for call in client.calls] == ["fetch_bot_info"]


@pytest.mark.asyncio
async def test_set_webhook_with_pinned_app_id_skips_lookup(mock_api):
    api = mock_api(app_id="pinned-app")
    await set_webhook(url="https://bot.example.com/hook", client=api.client)
    assert len(api.requests) == 1
    assert api.last.method == "PUT"
    assert api.last.url.path == "/api/developer/apps/pinned-app/webhook"
    assert json.loads(api.last.content) == {"url": "https://bot.example.com/hook"}
