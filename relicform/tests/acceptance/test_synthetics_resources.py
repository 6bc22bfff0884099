"""Lifecycle tests against a live New Relic account.

Each test creates real monitors, policies and conditions and removes them
afterwards. Run with NEW_RELIC_API_KEY and NEW_RELIC_ACCOUNT_ID set; the
region and endpoint variables of relicform.config apply as usual.
"""

import os
import uuid
from collections.abc import AsyncIterator
from typing import Any

import pytest

from relicform.config import load_settings
from relicform.core.errors import NotFoundError
from relicform.core.provider import ProviderConfig
from relicform.core.resources import resource_mapping
from relicform.main import Clients

pytestmark = [
    pytest.mark.acceptance,
    pytest.mark.skipif(
        not (os.getenv("NEW_RELIC_API_KEY") and os.getenv("NEW_RELIC_ACCOUNT_ID")),
        reason="NEW_RELIC_API_KEY and NEW_RELIC_ACCOUNT_ID are required",
    ),
]

CERT_CHECK = "newrelic_synthetics_cert_check_monitor"
CONDITION = "newrelic_synthetics_alert_condition"
POLICY = "newrelic_alert_policy"


def unique_name(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


@pytest.fixture
async def meta() -> AsyncIterator[ProviderConfig]:
    clients = Clients(load_settings())
    try:
        yield clients.provider_config
    finally:
        await clients.close()


def cert_check_config(name: str, **overrides: Any) -> dict[str, Any]:
    config: dict[str, Any] = {
        "name": name,
        "domain": "www.example.com",
        "certificate_expiration": 10,
        "locations_public": ["AP_SOUTH_1"],
        "period": "EVERY_6_HOURS",
        "status": "ENABLED",
        "runtime_type": "NODE_API",
        "runtime_type_version": "16.10",
        "tag": [{"key": "cars", "values": ["audi"]}],
    }
    config.update(overrides)
    return config


@pytest.mark.asyncio
class TestCertCheckMonitorAcceptance:
    """Create, refresh, update and import a cert check monitor."""

    async def test_lifecycle(self, meta: ProviderConfig) -> None:
        resource = resource_mapping()[CERT_CHECK]
        name = unique_name("tf-test-cert-check")

        created = await resource.create(meta, cert_check_config(name))
        try:
            refreshed = await resource.read(meta, created.id, created.to_dict())
            assert refreshed is not None
            for key in ("name", "period", "status", "locations_public", "monitor_id"):
                assert refreshed.get(key) == created.get(key), key

            updated = await resource.update(
                meta,
                created.id,
                cert_check_config(
                    f"{name}-updated",
                    certificate_expiration=20,
                    period="EVERY_DAY",
                    status="DISABLED",
                ),
                refreshed.to_dict(),
            )
            assert updated.get("period_in_minutes") == 1440

            imported = await resource.import_state(meta, created.id)
            assert imported is not None
            assert imported.get("name") == f"{name}-updated"
            assert imported.get("status") == "DISABLED"
        finally:
            await resource.delete(meta, created.id)

        assert await resource.read(meta, created.id) is None


@pytest.mark.asyncio
class TestSyntheticsAlertConditionAcceptance:
    """Attach a synthetics alert condition to a fresh policy and monitor."""

    async def test_lifecycle(self, meta: ProviderConfig) -> None:
        resources = resource_mapping()
        name = unique_name("tf-test-condition")

        policy = await resources[POLICY].create(meta, {"name": name})
        monitor = await resources[CERT_CHECK].create(meta, cert_check_config(name))
        condition = None
        try:
            config = {
                "policy_id": int(policy.id),
                "name": name,
                "monitor_id": monitor.get("monitor_id"),
                "runbook_url": "https://foo.example.com",
                "enabled": True,
            }
            condition = await resources[CONDITION].create(meta, config)

            refreshed = await resources[CONDITION].read(meta, condition.id)
            assert refreshed is not None
            assert refreshed.to_dict() == condition.to_dict()

            updated = await resources[CONDITION].update(
                meta,
                condition.id,
                {**config, "name": f"{name}-updated", "enabled": False},
                condition.to_dict(),
            )
            assert updated.get("enabled") is False

            imported = await resources[CONDITION].import_state(meta, condition.id)
            assert imported is not None
            assert imported.get("name") == f"{name}-updated"
        finally:
            if condition is not None:
                await resources[CONDITION].delete(meta, condition.id)
            await resources[CERT_CHECK].delete(meta, monitor.id)
            await resources[POLICY].delete(meta, policy.id)

    async def test_missing_policy(self, meta: ProviderConfig) -> None:
        resources = resource_mapping()
        name = unique_name("tf-test-condition")

        policy = await resources[POLICY].create(meta, {"name": name})
        monitor = await resources[CERT_CHECK].create(meta, cert_check_config(name))
        try:
            condition = await resources[CONDITION].create(
                meta,
                {
                    "policy_id": int(policy.id),
                    "name": name,
                    "monitor_id": monitor.get("monitor_id"),
                },
            )

            await resources[POLICY].delete(meta, policy.id)

            assert await resources[CONDITION].read(meta, condition.id) is None
        finally:
            await resources[CERT_CHECK].delete(meta, monitor.id)
            try:
                await resources[POLICY].delete(meta, policy.id)
            except NotFoundError:
                pass
