"""Minimal sanity checks for the Solafon MCP tools against the live API."""

from __future__ import annotations

import asyncio
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from solafon_mcp.config import default_config  # noqa: E402
from solafon_mcp.envelope import unwrap  # noqa: E402
from solafon_mcp.solafon_api import default_client  # noqa: E402
from solafon_mcp.tools import (  # noqa: E402
    get_bot_info,
    get_latest_blockhash,
    get_token_list,
    get_token_prices,
    get_wallet_balance,
)

# Any public Solana address works; override via env.
SAMPLE_ADDRESS = os.getenv("SOLAFON_SAMPLE_ADDRESS", "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU")


async def main() -> None:
    try:
        print("Latest blockhash:", unwrap(await get_latest_blockhash()))
        print("Token list:", unwrap(await get_token_list()))
        print("Token prices:", unwrap(await get_token_prices()))
        print("Wallet balance:", unwrap(await get_wallet_balance(address=SAMPLE_ADDRESS)))

        # Bot endpoints need a token.
        if default_config.bot_token:
            print("Bot info:", unwrap(await get_bot_info()))
    finally:
        await default_client.aclose()


if __name__ == "__main__":
    asyncio.run(main())
