import json

import httpx
import pytest

from solafon_mcp.envelope import unwrap
from solafon_mcp.solafon_api.client import BOT_TOKEN_HEADER
from solafon_mcp.tools.wallet import (
    get_latest_blockhash,
    get_token_list,
    get_token_prices,
    get_transaction_history,
    get_transaction_status,
    get_wallet_balance,
    send_transaction,
    simulate_transaction,
)

ADDRESS = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"


@pytest.mark.asyncio
async def test_wallet_balance_scenario(mock_api):
    balance = {"address": ADDRESS, "sol": 1.5, "usd": 210.4, "tokens": []}
    api = mock_api(lambda request: httpx.Response(200, json=balance))
    envelope = await get_wallet_balance(address=ADDRESS, client=api.client)
    assert api.last.method == "GET"
    assert api.last.url.path == "/api/wallet/balance"
    assert dict(api.last.url.params) == {"address": ADDRESS}
    assert BOT_TOKEN_HEADER not in api.last.headers
    assert unwrap(envelope) == balance


@pytest.mark.asyncio
async def test_token_prices_default_all(mock_api):
    api = mock_api()
    await get_token_prices(client=api.client)
    assert dict(api.last.url.params) == {"mints": "all"}
    await get_token_prices(mints="", client=api.client)
    assert dict(api.last.url.params) == {"mints": "all"}
    await get_token_prices(mints="So11111111111111111111111111111111111111112", client=api.client)
    assert dict(api.last.url.params) == {"mints": "So11111111111111111111111111111111111111112"}


@pytest.mark.asyncio
async def test_transaction_history_query(mock_api):
    api = mock_api()
    await get_transaction_history(address=ADDRESS, client=api.client)
    assert dict(api.last.url.params) == {"address": ADDRESS, "limit": "20"}
    await get_transaction_history(address=ADDRESS, limit=5, before="5sig", client=api.client)
    assert dict(api.last.url.params) == {"address": ADDRESS, "limit": "5", "before": "5sig"}


@pytest.mark.asyncio
async def test_status_blockhash_and_tokens(mock_api):
    api = mock_api(lambda request: httpx.Response(200, json={"path": request.url.path}))
    assert unwrap(await get_transaction_status(signature="5sig", client=api.client)) == {"path": "/api/wallet/status"}
    assert dict(api.last.url.params) == {"signature": "5sig"}
    assert unwrap(await get_latest_blockhash(client=api.client)) == {"path": "/api/wallet/blockhash"}
    assert unwrap(await get_token_list(client=api.client)) == {"path": "/api/wallet/tokens"}


@pytest.mark.asyncio
async def test_send_and_simulate_bodies(mock_api):
    api = mock_api(lambda request: httpx.Response(400, json={"error": "Blockhash not found"}))
    envelope = await send_transaction(signed_transaction="AQID", client=api.client)
    assert json.loads(api.last.content) == {"signedTransaction": "AQID"}
    # Downstream errors come back as data.
    assert unwrap(envelope) == {"error": "Blockhash not found"}

    await simulate_transaction(transaction="BAUG", client=api.client)
    assert api.last.url.path == "/api/wallet/simulate"
    assert json.loads(api.last.content) == {"transaction": "BAUG"}


@pytest.mark.asyncio
async def test_non_json_response_is_wrapped(mock_api):
    api = mock_api(lambda request: httpx.Response(503, text="upstream down"))
    envelope = await get_latest_blockhash(client=api.client)
    assert unwrap(envelope) == {"status": 503, "body": "upstream down"}
