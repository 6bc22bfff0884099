"""NerdGraph GraphQL transport.

Posts queries and mutations to the NerdGraph endpoint and unwraps the
`data` member of the response. Top-level GraphQL errors are raised as
NerdGraphError; typed errors inside mutation payloads are left for the
calling adapter to normalize.
"""

import logging
from typing import Any

import httpx

from relicform.core.errors import NerdGraphError

logger = logging.getLogger(__name__)


class NerdGraphClient:
    """Thin async GraphQL client for NerdGraph."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize NerdGraph client.

        Args:
            api_url: NerdGraph endpoint (e.g., https://api.newrelic.com/graphql)
            api_key: New Relic user API key
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used to stub the API in tests
        """
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.client = httpx.AsyncClient(
            headers=self._get_headers(),
            timeout=timeout,
            transport=transport,
        )

    def _get_headers(self) -> dict[str, str]:
        """Build request headers."""
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["API-Key"] = self.api_key
        return headers

    async def __aenter__(self) -> "NerdGraphClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.client.aclose()

    async def close(self) -> None:
        """Close the httpx client and clean up resources."""
        await self.client.aclose()

    async def query(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Execute a GraphQL document and return its `data` member.

        Raises:
            httpx.HTTPError: If the endpoint is unreachable or answers non-2xx.
            NerdGraphError: If the response carries top-level errors.
        """
        try:
            response = await self.client.post(
                self.api_url,
                json={"query": query, "variables": variables or {}},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"NerdGraph request failed: {e}")
            raise

        body = response.json()
        errors = body.get("errors") or []
        if errors:
            messages = [error.get("message", "") for error in errors]
            logger.error(f"NerdGraph returned errors: {messages}")
            raise NerdGraphError(messages)

        return body.get("data") or {}
