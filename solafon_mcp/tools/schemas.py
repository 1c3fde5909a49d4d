"""
Input models for the Solafon tools.

Each model is both the advertised JSON schema (``inputSchema``) and the
validator applied to incoming arguments. Python attribute names are
snake_case; the wire names are the camelCase aliases used by the Solafon API.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from solafon_mcp.tools.validators import UUID_PATTERN, is_valid_url

MessageType = Literal["text", "image", "carousel"]
ButtonAction = Literal["callback", "url", "webApp"]

DEFAULT_CONVERSATIONS_LIMIT = 20
MAX_CONVERSATIONS_LIMIT = 100
DEFAULT_MESSAGES_LIMIT = 50
MAX_MESSAGES_LIMIT = 100
DEFAULT_TRANSACTIONS_LIMIT = 20
MAX_TRANSACTIONS_LIMIT = 50


def _uuid_field(description: str, *, alias: Optional[str] = None) -> Any:
    return Field(alias=alias, pattern=UUID_PATTERN, description=description)


def _check_url(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_valid_url(value):
        raise ValueError("must be a valid URL")
    return value


class ToolInput(BaseModel):
    # Unknown keys are dropped, but the advertised schema stays closed.
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={"additionalProperties": False},
    )


class Button(ToolInput):
    id: str = Field(description="Unique button ID")
    text: str = Field(description="Button label")
    action: ButtonAction = Field(description="Button action type")
    payload: Optional[str] = Field(default=None, description="Callback payload (for action=callback)")
    url: Optional[str] = Field(default=None, description="URL to open (for action=url or webApp)")


class Card(ToolInput):
    id: str = Field(description="Unique card ID")
    title: str = Field(description="Card title")
    subtitle: Optional[str] = Field(default=None, description="Card subtitle")
    image_url: Optional[str] = Field(default=None, alias="imageUrl", description="Card image URL")
    buttons: Optional[List[Button]] = Field(default=None, description="Card buttons")


class NoArguments(ToolInput):
    pass


class SendMessageInput(ToolInput):
    conversation_id: str = _uuid_field(
        "The conversation ID to send the message to", alias="conversationId"
    )
    message_type: MessageType = Field(default="text", alias="type", description="Message content type")
    text: Optional[str] = Field(
        default=None, description="Text content of the message (required for type=text)"
    )
    image_url: Optional[str] = Field(
        default=None,
        alias="imageUrl",
        description="Image URL (for type=image)",
        json_schema_extra={"format": "uri"},
    )
    buttons: Optional[List[Button]] = Field(
        default=None, description="Interactive buttons attached to the message"
    )
    cards: Optional[List[Card]] = Field(default=None, description="Cards for carousel messages")

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, value: Optional[str]) -> Optional[str]:
        return _check_url(value)


class EditMessageInput(ToolInput):
    message_id: str = _uuid_field("ID of the message to edit", alias="messageId")
    message_type: MessageType = Field(default="text", alias="type", description="Message content type")
    text: Optional[str] = Field(default=None, description="New text content")
    buttons: Optional[List[Button]] = None


class DeleteMessageInput(ToolInput):
    message_id: str = _uuid_field("ID of the message to delete", alias="messageId")


class ListConversationsInput(ToolInput):
    limit: int = Field(
        default=DEFAULT_CONVERSATIONS_LIMIT,
        strict=True,
        ge=1,
        le=MAX_CONVERSATIONS_LIMIT,
        description="Number of conversations to return",
    )
    offset: int = Field(default=0, strict=True, ge=0, description="Offset for pagination")


class GetConversationMessagesInput(ToolInput):
    conversation_id: str = _uuid_field("Conversation ID", alias="conversationId")
    limit: int = Field(
        default=DEFAULT_MESSAGES_LIMIT,
        strict=True,
        ge=1,
        le=MAX_MESSAGES_LIMIT,
        description="Number of messages",
    )
    before: Optional[str] = Field(
        default=None,
        pattern=UUID_PATTERN,
        description="Cursor: message ID to paginate before",
    )


class GetUserInput(ToolInput):
    user_id: str = _uuid_field("User ID", alias="userId")


class SetWebhookInput(ToolInput):
    url: str = Field(description="Webhook URL (must be HTTPS)", json_schema_extra={"format": "uri"})
    events: Optional[List[str]] = Field(
        default=None, description="Event types to subscribe to (default: all)"
    )

    @field_validator("url")
    @classmethod
    def check_url(cls, value: str) -> str:
        return _check_url(value)


class SetWelcomeMessageInput(ToolInput):
    text: str = Field(description="Welcome message text")
    buttons: Optional[List[Button]] = Field(
        default=None, description="Optional buttons on the welcome message"
    )


class GetWalletBalanceInput(ToolInput):
    address: str = Field(description="Solana wallet address (base58)")


class GetTokenPricesInput(ToolInput):
    mints: Optional[str] = Field(
        default=None,
        description="Comma-separated mint addresses, or 'all' for all supported tokens",
    )


class GetTransactionHistoryInput(ToolInput):
    address: str = Field(description="Solana wallet address")
    limit: int = Field(
        default=DEFAULT_TRANSACTIONS_LIMIT,
        strict=True,
        ge=1,
        le=MAX_TRANSACTIONS_LIMIT,
        description="Number of transactions",
    )
    before: Optional[str] = Field(
        default=None, description="Transaction signature cursor for pagination"
    )


class GetTransactionStatusInput(ToolInput):
    signature: str = Field(description="Transaction signature")


class SendTransactionInput(ToolInput):
    signed_transaction: str = Field(
        alias="signedTransaction", description="Base64-encoded signed transaction"
    )


class SimulateTransactionInput(ToolInput):
    transaction: str = Field(description="Base64-encoded transaction to simulate")


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True)
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def to_kwargs(model: ToolInput) -> Dict[str, Any]:
    """
    Turn a validated model into handler keyword arguments.

    Top-level keys are the Python field names; nested buttons and cards are
    converted back to plain dicts keyed by their wire names, with unset
    optional keys left out.
    """
    return {name: _plain(getattr(model, name)) for name in type(model).model_fields}


def describe_errors(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ())) or "arguments"
        parts.append(f"{location}: {err.get('msg')}")
    return "; ".join(parts)
