import os
import sys

import httpx
import pytest

# Ensure repository root is on sys.path before importing project modules.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from solafon_mcp.config import SolafonConfig  # noqa: E402
from solafon_mcp.metrics import default_metrics  # noqa: E402
from solafon_mcp.solafon_api.client import SolafonApiClient  # noqa: E402

TEST_BASE_URL = "https://api.solafon.test"


class MockSolafonApi:
    """Records outbound requests and answers them from ``responder``."""

    def __init__(self, responder=None, *, bot_token=None, app_id=None):
        self.requests: list[httpx.Request] = []
        self._responder = responder or (lambda request: httpx.Response(200, json={"ok": True}))
        self.config = SolafonConfig(
            base_url=TEST_BASE_URL,
            timeout=5.0,
            bot_token=bot_token,
            app_id=app_id,
        )
        async_client = httpx.AsyncClient(
            base_url=TEST_BASE_URL, transport=httpx.MockTransport(self._handle)
        )
        self.client = SolafonApiClient(self.config, async_client=async_client)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def mock_api():
    def factory(responder=None, **kwargs):
        return MockSolafonApi(responder, **kwargs)

    return factory


@pytest.fixture(autouse=True)
def reset_metrics():
    default_metrics.reset()
    yield
    default_metrics.reset()
