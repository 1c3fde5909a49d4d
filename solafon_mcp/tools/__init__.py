"""LLM-facing tool implementations."""

from .bot import (
    delete_message,
    edit_message,
    get_bot_info,
    get_conversation_messages,
    get_user,
    list_conversations,
    send_message,
    set_webhook,
    set_welcome_message,
)
from .wallet import (
    get_latest_blockhash,
    get_token_list,
    get_token_prices,
    get_transaction_history,
    get_transaction_status,
    get_wallet_balance,
    send_transaction,
    simulate_transaction,
)
from . import schemas, validators

__all__ = [
    "get_bot_info",
    "send_message",
    "edit_message",
    "delete_message",
    "list_conversations",
    "get_conversation_messages",
    "get_user",
    "set_webhook",
    "set_welcome_message",
    "get_wallet_balance",
    "get_token_list",
    "get_token_prices",
    "get_transaction_history",
    "get_transaction_status",
    "get_latest_blockhash",
    "send_transaction",
    "simulate_transaction",
    "schemas",
    "validators",
]
