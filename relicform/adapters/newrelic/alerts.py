"""REST v2 alerts adapter.

Implements AlertsPort against the `alerts_policies` and
`alerts_synthetics_conditions` endpoints of the New Relic REST API v2.
"""

import logging
from typing import Any

import httpx

from relicform.core.errors import APIError, NotFoundError
from relicform.core.models import AlertPolicy, IncidentPreference, SyntheticsCondition
from relicform.core.ports import AlertsPort

logger = logging.getLogger(__name__)


class RestAlertsAdapter(AlertsPort):
    """Alert policies and synthetics conditions via REST API v2."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize REST alerts adapter.

        Args:
            api_url: Base URL for REST API v2 (e.g., https://api.newrelic.com/v2)
            api_key: New Relic user API key
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used to stub the API in tests
        """
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.client = httpx.AsyncClient(
            base_url=self.api_url,
            headers={"Api-Key": api_key, "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "RestAlertsAdapter":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.client.aclose()

    async def close(self) -> None:
        """Close the httpx client and clean up resources."""
        await self.client.aclose()

    # ------------------------------------------------------------------
    # Policies
    # ------------------------------------------------------------------

    async def create_policy(self, policy: AlertPolicy) -> AlertPolicy:
        data = await self._request(
            "POST",
            "/alerts_policies.json",
            json={"policy": self._policy_body(policy)},
        )
        return self._parse_policy(data["policy"])

    async def get_policy(self, policy_id: int) -> AlertPolicy:
        """Find a policy by paging through the policy list.

        Raises:
            NotFoundError: If no page lists the policy.
        """
        page = 1
        while True:
            data = await self._request(
                "GET", "/alerts_policies.json", params={"page": page}
            )
            policies = data.get("policies") or []
            if not policies:
                break
            for item in policies:
                if item.get("id") == policy_id:
                    return self._parse_policy(item)
            page += 1

        raise NotFoundError(f"alert policy {policy_id} not found")

    async def update_policy(self, policy: AlertPolicy) -> AlertPolicy:
        data = await self._request(
            "PUT",
            f"/alerts_policies/{policy.id}.json",
            json={"policy": self._policy_body(policy)},
        )
        return self._parse_policy(data["policy"])

    async def delete_policy(self, policy_id: int) -> None:
        await self._request("DELETE", f"/alerts_policies/{policy_id}.json")

    # ------------------------------------------------------------------
    # Synthetics conditions
    # ------------------------------------------------------------------

    async def list_synthetics_conditions(self, policy_id: int) -> list[SyntheticsCondition]:
        data = await self._request(
            "GET",
            "/alerts_synthetics_conditions.json",
            params={"policy_id": policy_id},
        )
        return [
            self._parse_condition(item)
            for item in data.get("synthetics_conditions") or []
        ]

    async def create_synthetics_condition(
        self, policy_id: int, condition: SyntheticsCondition
    ) -> SyntheticsCondition:
        data = await self._request(
            "POST",
            f"/alerts_synthetics_conditions/policies/{policy_id}.json",
            json={"synthetics_condition": self._condition_body(condition)},
        )
        return self._parse_condition(data["synthetics_condition"])

    async def get_synthetics_condition(
        self, policy_id: int, condition_id: int
    ) -> SyntheticsCondition:
        for condition in await self.list_synthetics_conditions(policy_id):
            if condition.id == condition_id:
                return condition
        raise NotFoundError(
            f"synthetics condition {condition_id} not found in policy {policy_id}"
        )

    async def update_synthetics_condition(
        self, condition: SyntheticsCondition
    ) -> SyntheticsCondition:
        data = await self._request(
            "PUT",
            f"/alerts_synthetics_conditions/{condition.id}.json",
            json={"synthetics_condition": self._condition_body(condition)},
        )
        return self._parse_condition(data["synthetics_condition"])

    async def delete_synthetics_condition(self, condition_id: int) -> None:
        await self._request(
            "DELETE", f"/alerts_synthetics_conditions/{condition_id}.json"
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and return the decoded body.

        Raises:
            NotFoundError: On HTTP 404.
            APIError: On any other non-2xx status.
            httpx.HTTPError: If the API is unreachable.
        """
        try:
            response = await self.client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.error(f"Failed to call New Relic REST API {method} {path}: {e}")
            raise

        if response.status_code == 404:
            raise NotFoundError(f"{method} {path}: {self._error_message(response)}")
        if response.is_error:
            message = self._error_message(response)
            logger.error(f"New Relic REST API {method} {path} failed: {response.status_code} {message}")
            raise APIError(response.status_code, message)

        if not response.content:
            return {}
        return response.json()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("title"):
            return error["title"]
        return response.text or response.reason_phrase

    @staticmethod
    def _policy_body(policy: AlertPolicy) -> dict[str, Any]:
        return {
            "name": policy.name,
            "incident_preference": policy.incident_preference.value,
        }

    @staticmethod
    def _parse_policy(data: dict[str, Any]) -> AlertPolicy:
        return AlertPolicy(
            id=data.get("id"),
            name=data.get("name", ""),
            incident_preference=IncidentPreference(
                data.get("incident_preference") or IncidentPreference.PER_POLICY.value
            ),
        )

    @staticmethod
    def _condition_body(condition: SyntheticsCondition) -> dict[str, Any]:
        body: dict[str, Any] = {
            "name": condition.name,
            "monitor_id": condition.monitor_id,
            "enabled": condition.enabled,
        }
        if condition.runbook_url:
            body["runbook_url"] = condition.runbook_url
        return body

    @staticmethod
    def _parse_condition(data: dict[str, Any]) -> SyntheticsCondition:
        return SyntheticsCondition(
            id=data.get("id"),
            name=data.get("name", ""),
            monitor_id=data.get("monitor_id", ""),
            enabled=bool(data.get("enabled", True)),
            runbook_url=data.get("runbook_url") or "",
        )
