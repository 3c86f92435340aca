from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from safelyq.services.exceptions import ResponseParseError, TransportError

logger = logging.getLogger(__name__)


class GraphQLClient:
    """Async HTTP client for the SafelyQ GraphQL and identity endpoints.

    A single pooled ``httpx.AsyncClient`` is shared by every tool invocation,
    so the client never stores per-user state. Bearer tokens are passed on the
    individual request that needs them.
    """

    def __init__(
        self,
        graphql_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._graphql_url = str(graphql_url)
        self._timeout = timeout
        self._transport = transport
        self._headers = {"Accept": "application/json"}
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def graphql_url(self) -> str:
        return self._graphql_url

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout,
            headers=self._headers,
            transport=self._transport,
        )

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = self._build_client()
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def _parse(response: httpx.Response) -> Any:
        if response.is_error:
            logger.warning(
                "SafelyQ endpoint %s returned status %s",
                response.request.url,
                response.status_code,
            )
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ResponseParseError(
                "SafelyQ endpoint returned a non-JSON response",
                body=response.text,
                cause=exc,
            ) from exc

    async def post_json(
        self,
        url: str,
        body: Dict[str, Any],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """POST ``body`` as JSON to ``url`` and return the parsed response."""

        client = self._ensure_client()
        request_headers = {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)
        try:
            response = await client.post(url, json=body, headers=request_headers)
        except httpx.RequestError as exc:
            logger.exception("Unable to reach SafelyQ endpoint %s", url)
            raise TransportError("Unable to reach SafelyQ service", cause=exc) from exc
        return self._parse(response)

    async def query(
        self,
        query: str,
        *,
        operation_name: str | None = None,
        variables: Dict[str, Any] | None = None,
        bearer_token: str | None = None,
    ) -> Any:
        """Run a GraphQL document against the configured endpoint."""

        payload: Dict[str, Any] = {"query": query}
        if operation_name:
            payload["operationName"] = operation_name
        if variables is not None:
            payload["variables"] = variables
        headers = {"Authorization": f"Bearer {bearer_token}"} if bearer_token else None
        logger.debug("GraphQL %s variables=%s", operation_name or "<anonymous>", variables)
        return await self.post_json(self._graphql_url, payload, headers=headers)

    async def fetch_oauth_token(
        self, token_url: str, client_id: str, client_secret: str
    ) -> Optional[str]:
        """Obtain an access token with the OAuth client-credentials grant.

        Returns ``None`` when the response carries no ``access_token``.
        """

        client = self._ensure_client()
        form = {
            "grant_type": "client_credentials",
            "client_id": client_id,
            "client_secret": client_secret,
        }
        try:
            response = await client.post(str(token_url), data=form)
        except httpx.RequestError as exc:
            logger.exception("Unable to reach token endpoint %s", token_url)
            raise TransportError("Unable to reach SafelyQ identity service", cause=exc) from exc

        document = self._parse(response)
        if not isinstance(document, dict):
            return None
        token = document.get("access_token")
        if isinstance(token, str) and token:
            return token
        return None
