import os
import sys
from typing import Any, Dict, List, Optional

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from safelyq.config import get_settings
from safelyq.dependencies.services import (
    get_graphql_client_cached,
    get_tool_registry_cached,
)


@pytest.fixture(autouse=True)
def _reset_caches(monkeypatch) -> None:
    for key in list(os.environ):
        if key.startswith("SAFELYQ_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    get_graphql_client_cached.cache_clear()
    get_tool_registry_cached.cache_clear()
    yield
    get_settings.cache_clear()
    get_graphql_client_cached.cache_clear()
    get_tool_registry_cached.cache_clear()


class FakeGateway:
    """Stand-in for ``GraphQLClient`` that replays canned responses."""

    def __init__(
        self,
        responses: Optional[List[Any]] = None,
        *,
        token: Any = "token-123",
    ) -> None:
        self._responses = list(responses or [])
        self._token = token
        self.queries: List[Dict[str, Any]] = []
        self.token_requests: List[Dict[str, Any]] = []

    async def query(
        self,
        query: str,
        *,
        operation_name: Optional[str] = None,
        variables: Optional[Dict[str, Any]] = None,
        bearer_token: Optional[str] = None,
    ) -> Any:
        self.queries.append(
            {
                "query": query,
                "operation_name": operation_name,
                "variables": variables,
                "bearer_token": bearer_token,
            }
        )
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def fetch_oauth_token(
        self, token_url: str, client_id: str, client_secret: str
    ) -> Optional[str]:
        self.token_requests.append(
            {"token_url": token_url, "client_id": client_id, "client_secret": client_secret}
        )
        if isinstance(self._token, Exception):
            raise self._token
        return self._token


@pytest.fixture
def fake_gateway_factory():
    return FakeGateway
