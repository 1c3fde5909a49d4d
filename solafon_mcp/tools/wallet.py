"""Wallet API tools (public, non-custodial endpoints)."""

from __future__ import annotations

from typing import Any, Dict, Optional

from solafon_mcp.envelope import wrap
from solafon_mcp.solafon_api import default_client

ALL_MINTS = "all"


async def get_wallet_balance(*, address: str, client=default_client) -> Dict[str, Any]:
    """SOL and SPL token balances for an address, with USD values."""
    return wrap(await client.fetch_wallet_balance(address))


async def get_token_list(*, client=default_client) -> Dict[str, Any]:
    return wrap(await client.fetch_token_list())


async def get_token_prices(*, mints: Optional[str] = None, client=default_client) -> Dict[str, Any]:
    """USD prices for the given comma-separated mints, or every supported token."""
    return wrap(await client.fetch_token_prices(mints or ALL_MINTS))


async def get_transaction_history(
    *,
    address: str,
    limit: int = 20,
    before: Optional[str] = None,
    client=default_client,
) -> Dict[str, Any]:
    return wrap(await client.fetch_transactions(address, limit=limit, before=before))


async def get_transaction_status(*, signature: str, client=default_client) -> Dict[str, Any]:
    return wrap(await client.fetch_transaction_status(signature))


async def get_latest_blockhash(*, client=default_client) -> Dict[str, Any]:
    return wrap(await client.fetch_latest_blockhash())


async def send_transaction(*, signed_transaction: str, client=default_client) -> Dict[str, Any]:
    """Broadcast a transaction that was signed client-side."""
    return wrap(await client.send_transaction(signed_transaction))


async def simulate_transaction(*, transaction: str, client=default_client) -> Dict[str, Any]:
    return wrap(await client.simulate_transaction(transaction))
