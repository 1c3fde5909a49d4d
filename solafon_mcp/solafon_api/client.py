"""
Thin HTTP client for the Solafon Bot and Wallet APIs.

Responses are returned as parsed JSON whatever the status code; the tool layer
passes downstream error bodies through as data. Only transport failures are
raised.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

import httpx

from solafon_mcp.config import SolafonConfig, default_config

logger = logging.getLogger(__name__)

BOT_TOKEN_HEADER = "X-Bot-Token"
ALLOWED_METHODS = frozenset({"GET", "POST", "PATCH", "PUT", "DELETE"})


class SolafonApiError(Exception):
    """Base exception for Solafon API errors."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SolafonUnreachableError(SolafonApiError):
    """Raised when the API cannot be reached (DNS, refused connection, timeout)."""


def _segment(value: str) -> str:
    return quote(str(value), safe="")


def _build_query(query: Optional[Mapping[str, Any]]) -> Optional[Dict[str, str]]:
    if not query:
        return None
    params: Dict[str, str] = {}
    for key, value in query.items():
        if value is None:
            continue
        text = str(value)
        if text:
            params[key] = text
    return params or None


class SolafonApiClient:
    """Async client for the Solafon API surface exposed as MCP tools."""

    def __init__(
        self,
        config: SolafonConfig | None = None,
        *,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or default_config
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url, timeout=self.config.timeout
            )
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _build_headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {"Content-Type": "application/json"}
        if self.config.bot_token:
            headers[BOT_TOKEN_HEADER] = self.config.bot_token
        return headers

    @staticmethod
    def _process_response(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return {"status": response.status_code, "body": response.text}

    async def call(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Issue one request and return the decoded response body.

        Args:
            method: GET, POST, PATCH, PUT or DELETE.
            path: API path relative to the configured base URL.
            body: JSON-serializable request body, sent only when not None.
            query: Query parameters; empty values are left out of the URL.

        Returns:
            The parsed JSON body for any status code, or ``{"status", "body"}``
            when the body is not JSON.

        Raises:
            SolafonUnreachableError: the request never got a response.
        """
        verb = method.upper()
        if verb not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        client = await self._get_client()
        content = json.dumps(body) if body is not None else None
        try:
            response = await client.request(
                verb,
                path,
                params=_build_query(query),
                headers=self._build_headers(),
                content=content,
            )
        except httpx.RequestError as exc:
            logger.warning("Solafon API unreachable for %s %s", verb, path)
            raise SolafonUnreachableError("Solafon API unreachable") from exc

        logger.debug("solafon %s %s status=%s", verb, path, response.status_code)
        return self._process_response(response)

    # Bot API

    async def fetch_bot_info(self) -> Any:
        """Return the bot app tied to the configured token."""
        return await self.call("GET", "/api/bot/me")

    async def send_message(self, conversation_id: str, content: Dict[str, Any]) -> Any:
        return await self.call(
            "POST",
            "/api/bot/messages",
            {"conversationId": conversation_id, "content": content},
        )

    async def edit_message(self, message_id: str, content: Dict[str, Any]) -> Any:
        return await self.call(
            "PATCH", f"/api/bot/messages/{_segment(message_id)}", {"content": content}
        )

    async def delete_message(self, message_id: str) -> Any:
        return await self.call("DELETE", f"/api/bot/messages/{_segment(message_id)}")

    async def fetch_conversations(self, *, limit: int, offset: int) -> Any:
        return await self.call(
            "GET", "/api/bot/conversations", query={"limit": limit, "offset": offset}
        )

    async def fetch_conversation_messages(
        self, conversation_id: str, *, limit: int, before: Optional[str] = None
    ) -> Any:
        return await self.call(
            "GET",
            f"/api/bot/conversations/{_segment(conversation_id)}/messages",
            query={"limit": limit, "before": before},
        )

    async def fetch_user(self, user_id: str) -> Any:
        return await self.call("GET", f"/api/bot/users/{_segment(user_id)}")

    async def update_webhook(
        self, app_id: str, *, url: str, events: Optional[List[str]] = None
    ) -> Any:
        body: Dict[str, Any] = {"url": url}
        if events is not None:
            body["events"] = events
        return await self.call("PUT", f"/api/developer/apps/{_segment(app_id)}/webhook", body)

    async def update_welcome_message(self, app_id: str, content: Dict[str, Any]) -> Any:
        return await self.call(
            "PUT",
            f"/api/developer/apps/{_segment(app_id)}/welcome-message",
            {"content": content},
        )

    # Wallet API (public endpoints)

    async def fetch_wallet_balance(self, address: str) -> Any:
        return await self.call("GET", "/api/wallet/balance", query={"address": address})

    async def fetch_token_list(self) -> Any:
        return await self.call("GET", "/api/wallet/tokens")

    async def fetch_token_prices(self, mints: str) -> Any:
        return await self.call("GET", "/api/wallet/prices", query={"mints": mints})

    async def fetch_transactions(
        self, address: str, *, limit: int, before: Optional[str] = None
    ) -> Any:
        return await self.call(
            "GET",
            "/api/wallet/transactions",
            query={"address": address, "limit": limit, "before": before},
        )

    async def fetch_transaction_status(self, signature: str) -> Any:
        return await self.call("GET", "/api/wallet/status", query={"signature": signature})

    async def fetch_latest_blockhash(self) -> Any:
        return await self.call("GET", "/api/wallet/blockhash")

    async def send_transaction(self, signed_transaction: str) -> Any:
        return await self.call(
            "POST", "/api/wallet/send", {"signedTransaction": signed_transaction}
        )

    async def simulate_transaction(self, transaction: str) -> Any:
        return await self.call("POST", "/api/wallet/simulate", {"transaction": transaction})


default_client = SolafonApiClient()
