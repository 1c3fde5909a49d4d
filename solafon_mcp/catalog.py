"""
Tool catalog for the Solafon MCP server.

Maps tool names to their input models and implementations. The catalog is a
plain dict built once at import and shared by the stdio and HTTP transports;
neither transport adds tools of its own.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from pydantic import ValidationError

from solafon_mcp.envelope import is_error_payload, unwrap
from solafon_mcp.metrics import default_metrics
from solafon_mcp.tools import (
    delete_message,
    edit_message,
    get_bot_info,
    get_conversation_messages,
    get_latest_blockhash,
    get_token_list,
    get_token_prices,
    get_transaction_history,
    get_transaction_status,
    get_user,
    get_wallet_balance,
    list_conversations,
    send_message,
    send_transaction,
    set_webhook,
    set_welcome_message,
    simulate_transaction,
)
from solafon_mcp.tools.schemas import (
    DeleteMessageInput,
    EditMessageInput,
    GetConversationMessagesInput,
    GetTokenPricesInput,
    GetTransactionHistoryInput,
    GetTransactionStatusInput,
    GetUserInput,
    GetWalletBalanceInput,
    ListConversationsInput,
    NoArguments,
    SendMessageInput,
    SendTransactionInput,
    SetWebhookInput,
    SetWelcomeMessageInput,
    SimulateTransactionInput,
    ToolInput,
    describe_errors,
    to_kwargs,
)

logger = logging.getLogger(__name__)

ToolCallable = Callable[..., Awaitable[Dict[str, Any]]]


class ToolError(Exception):
    """Invocation-level failure raised before a tool handler runs."""


class ToolNotFoundError(ToolError, LookupError):
    pass


class ToolInputError(ToolError, ValueError):
    pass


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    name: str
    description: str
    input_model: Type[ToolInput]
    callable: ToolCallable

    @property
    def input_schema(self) -> Dict[str, Any]:
        schema = self.input_model.model_json_schema()
        schema.setdefault("properties", {})
        return schema

    def validate(self, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        try:
            model = self.input_model.model_validate(arguments or {})
        except ValidationError as exc:
            raise ToolInputError(f"Invalid arguments for tool {self.name}: {describe_errors(exc)}") from exc
        return to_kwargs(model)


def _tool(name: str, description: str, input_model: Type[ToolInput], handler: ToolCallable) -> ToolDefinition:
    return ToolDefinition(name=name, description=description, input_model=input_model, callable=handler)


_TOOLS = [
    # Bot API
    _tool(
        "get_bot_info",
        "Get information about the current bot app (name, description, status, webhook URL)",
        NoArguments,
        get_bot_info,
    ),
    _tool(
        "send_message",
        "Send a message from the bot to a user in a specific conversation. "
        "Supports text, buttons, images, and card carousels.",
        SendMessageInput,
        send_message,
    ),
    _tool("edit_message", "Edit a previously sent bot message", EditMessageInput, edit_message),
    _tool("delete_message", "Delete a bot message by ID", DeleteMessageInput, delete_message),
    _tool(
        "list_conversations",
        "List all conversations for the bot app with pagination",
        ListConversationsInput,
        list_conversations,
    ),
    _tool(
        "get_conversation_messages",
        "Get messages in a specific conversation",
        GetConversationMessagesInput,
        get_conversation_messages,
    ),
    _tool(
        "get_user",
        "Get information about a user who has a conversation with this bot",
        GetUserInput,
        get_user,
    ),
    _tool(
        "set_webhook",
        "Configure the webhook URL where the bot receives events (messages, callbacks)",
        SetWebhookInput,
        set_webhook,
    ),
    _tool(
        "set_welcome_message",
        "Set the welcome message shown when a user starts a conversation",
        SetWelcomeMessageInput,
        set_welcome_message,
    ),
    # Wallet API
    _tool(
        "get_wallet_balance",
        "Get SOL and SPL token balances for a Solana wallet address, including USD values",
        GetWalletBalanceInput,
        get_wallet_balance,
    ),
    _tool(
        "get_token_list",
        "Get the list of supported SPL tokens with mint addresses, symbols, and metadata",
        NoArguments,
        get_token_list,
    ),
    _tool("get_token_prices", "Get current USD prices for Solana tokens", GetTokenPricesInput, get_token_prices),
    _tool(
        "get_transaction_history",
        "Get transaction history for a Solana wallet address",
        GetTransactionHistoryInput,
        get_transaction_history,
    ),
    _tool(
        "get_transaction_status",
        "Check the confirmation status of a Solana transaction",
        GetTransactionStatusInput,
        get_transaction_status,
    ),
    _tool(
        "get_latest_blockhash",
        "Get the latest blockhash needed for building Solana transactions",
        NoArguments,
        get_latest_blockhash,
    ),
    _tool(
        "send_transaction",
        "Send a pre-signed Solana transaction to the network",
        SendTransactionInput,
        send_transaction,
    ),
    _tool(
        "simulate_transaction",
        "Simulate a Solana transaction to check for errors and estimate fees before sending",
        SimulateTransactionInput,
        simulate_transaction,
    ),
]

TOOL_REGISTRY: Dict[str, ToolDefinition] = {tool.name: tool for tool in _TOOLS}


def list_tools() -> List[Dict[str, Any]]:
    """Return the MCP tool listing."""
    return [
        {
            "name": tool.name,
            "description": tool.description,
            "inputSchema": tool.input_schema,
        }
        for tool in TOOL_REGISTRY.values()
    ]


def get_tool(tool_name: str) -> ToolDefinition:
    tool = TOOL_REGISTRY.get(tool_name)
    if tool is None:
        raise ToolNotFoundError(f"Unknown tool: {tool_name}")
    return tool


async def call_tool(
    tool_name: str,
    arguments: Optional[Dict[str, Any]] = None,
    *,
    client: Any = None,
) -> Dict[str, Any]:
    """
    Validate ``arguments`` and run the named tool.

    Raises:
        ToolNotFoundError: no tool has that name.
        ToolInputError: the arguments fail the tool's input model.

    Transport failures from the API client propagate unchanged.
    """
    tool = get_tool(tool_name)
    try:
        kwargs = tool.validate(arguments)
    except ToolInputError as exc:
        logger.info(
            "tool=%s outcome=invalid_params error=%s",
            tool_name,
            exc,
            extra={"tool": tool_name, "error": "invalid_params"},
        )
        default_metrics.record_tool(tool_name, success=False)
        raise

    if client is not None:
        kwargs["client"] = client
    start = time.monotonic()
    try:
        envelope = await tool.callable(**kwargs)
    except Exception as exc:
        logger.warning(
            "tool=%s outcome=failure error=%s",
            tool_name,
            type(exc).__name__,
            extra={"tool": tool_name, "error": type(exc).__name__},
        )
        default_metrics.record_tool(tool_name, success=False, duration_ms=_elapsed_ms(start))
        raise

    _log_tool_result(tool_name, envelope, _elapsed_ms(start))
    return envelope


def _elapsed_ms(start: float) -> float:
    return (time.monotonic() - start) * 1000


def _log_tool_result(tool_name: str, envelope: Dict[str, Any], duration_ms: Optional[float] = None) -> None:
    try:
        payload = unwrap(envelope)
    except (KeyError, IndexError, TypeError, ValueError):
        payload = None
    if is_error_payload(payload):
        logger.warning(
            "tool=%s outcome=error error=%s",
            tool_name,
            payload.get("error"),
            extra={"tool": tool_name, "error": payload.get("error")},
        )
        default_metrics.record_tool(tool_name, success=False, duration_ms=duration_ms)
    else:
        logger.info("tool=%s outcome=success", tool_name, extra={"tool": tool_name})
        default_metrics.record_tool(tool_name, success=True, duration_ms=duration_ms)
