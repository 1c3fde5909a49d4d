"""Static API reference documents served as MCP resources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

MARKDOWN_MIME_TYPE = "text/markdown"


class ResourceNotFoundError(LookupError):
    pass


BOT_API_DOC = """# Solafon Bot API Reference

Base URL: https://api.solafon.com
Auth: X-Bot-Token header

## Endpoints

| Method | Path | Description |
|--------|------|-------------|
| GET | /api/bot/me | Get bot info |
| POST | /api/bot/messages | Send message |
| PATCH | /api/bot/messages/:id | Edit message |
| DELETE | /api/bot/messages/:id | Delete message |
| GET | /api/bot/conversations | List conversations |
| GET | /api/bot/conversations/:id/messages | Get messages |
| GET | /api/bot/users/:id | Get user info |

## Message Types

- **text**: Simple text with optional buttons
- **image**: Image with optional caption
- **carousel**: Card carousel with images and buttons

## Button Actions

- **callback**: Triggers webhook callback event
- **url**: Opens URL in browser
- **webApp**: Opens URL in Solafon WebView

## Webhook Events

Your webhook URL receives POST requests:
- `message` — User sent a message
- `callback` — User clicked a button

## Rate Limits

1000 requests per minute per bot token.

Full docs: https://docs.solafon.com/en/docs/bot-api/overview
"""

WALLET_API_DOC = """# Solafon Wallet API Reference

Base URL: https://api.solafon.com
Auth: None required (public endpoints)

## Endpoints

| Method | Path | Description |
|--------|------|-------------|
| GET | /api/wallet/balance?address=... | Get wallet balance |
| GET | /api/wallet/tokens | Supported token list |
| GET | /api/wallet/prices?mints=... | Token prices (USD) |
| GET | /api/wallet/transactions?address=... | Transaction history |
| GET | /api/wallet/status?signature=... | Transaction status |
| GET | /api/wallet/blockhash | Latest blockhash |
| POST | /api/wallet/send | Send signed transaction |
| POST | /api/wallet/simulate | Simulate transaction |

## Non-Custodial Architecture

Solafon wallet is non-custodial. Private keys never leave the client.
The API provides:
- Balance queries (RPC proxy)
- Token metadata and prices
- Transaction broadcasting
- Transaction simulation

Full docs: https://docs.solafon.com/en/docs/wallet-api/overview
"""


@dataclass(frozen=True, slots=True)
class ResourceDefinition:
    uri: str
    name: str
    description: str
    text: str
    mime_type: str = MARKDOWN_MIME_TYPE

    def contents(self) -> Dict[str, Any]:
        return {"uri": self.uri, "mimeType": self.mime_type, "text": self.text}


RESOURCE_REGISTRY: Dict[str, ResourceDefinition] = {
    resource.uri: resource
    for resource in (
        ResourceDefinition(
            uri="docs://bot-api",
            name="docs://bot-api",
            description="Solafon Bot API reference",
            text=BOT_API_DOC,
        ),
        ResourceDefinition(
            uri="docs://wallet-api",
            name="docs://wallet-api",
            description="Solafon Wallet API reference",
            text=WALLET_API_DOC,
        ),
    )
}


def list_resources() -> List[Dict[str, Any]]:
    return [
        {
            "uri": resource.uri,
            "name": resource.name,
            "description": resource.description,
            "mimeType": resource.mime_type,
        }
        for resource in RESOURCE_REGISTRY.values()
    ]


def get_resource(uri: str) -> ResourceDefinition:
    # URL types may hand back the URI with a trailing slash.
    resource = RESOURCE_REGISTRY.get(str(uri).rstrip("/"))
    if resource is None:
        raise ResourceNotFoundError(f"Unknown resource: {uri}")
    return resource


def read_resource(uri: str) -> Dict[str, Any]:
    """Return the ``resources/read`` result for ``uri``."""
    return {"contents": [get_resource(uri).contents()]}
