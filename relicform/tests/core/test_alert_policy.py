"""Tests for the alert policy handlers."""

import pytest

from relicform.core.errors import ConfigValidationError
from relicform.core.models import AlertPolicy, IncidentPreference
from relicform.core.provider import ProviderConfig
from relicform.core.resources import alert_policy
from relicform.core.resources.alert_policy import RESOURCE_TYPE
from relicform.core.schema import Resource
from relicform.tests.fakes import fake_provider_config


@pytest.fixture
def meta() -> ProviderConfig:
    return fake_provider_config(account_id=555)


@pytest.fixture
def resource() -> Resource:
    return alert_policy.resource_mapping()[RESOURCE_TYPE]


def test_rejects_unknown_incident_preference(resource: Resource) -> None:
    with pytest.raises(ConfigValidationError, match="incident_preference"):
        resource.validate({"name": "p", "incident_preference": "PER_HOST"})


@pytest.mark.asyncio
class TestAlertPolicy:
    """Lifecycle tests for alert policies."""

    async def test_create_with_defaults(self, resource: Resource, meta: ProviderConfig) -> None:
        d = await resource.create(meta, {"name": "tf-test-policy"})

        assert d.id.isdigit()
        assert d.get("incident_preference") == "PER_POLICY"
        assert d.get("account_id") == 555

        stored = await meta.alerts.get_policy(int(d.id))
        assert stored.incident_preference is IncidentPreference.PER_POLICY

    async def test_update(self, resource: Resource, meta: ProviderConfig) -> None:
        created = await resource.create(meta, {"name": "tf-test-policy"})

        updated = await resource.update(
            meta,
            created.id,
            {"name": "tf-test-policy-renamed", "incident_preference": "PER_CONDITION"},
            created.to_dict(),
        )

        assert updated.get("name") == "tf-test-policy-renamed"
        assert updated.get("incident_preference") == "PER_CONDITION"
        assert updated.get("account_id") == 555

    async def test_read_missing_policy(self, resource: Resource, meta: ProviderConfig) -> None:
        created = await resource.create(meta, {"name": "tf-test-policy"})
        await resource.delete(meta, created.id)

        assert await resource.read(meta, created.id) is None

    async def test_import(self, resource: Resource, meta: ProviderConfig) -> None:
        created = await resource.create(
            meta, {"name": "tf-test-policy", "incident_preference": "PER_CONDITION_AND_TARGET"}
        )

        imported = await resource.import_state(meta, created.id)

        assert imported is not None
        assert imported.to_dict() == created.to_dict()

    async def test_import_without_default_account(self, resource: Resource) -> None:
        meta = fake_provider_config(account_id=None)
        policy = await meta.alerts.create_policy(AlertPolicy(name="tf-test-policy"))

        imported = await resource.import_state(meta, str(policy.id))

        assert imported is not None
        assert imported.get("name") == "tf-test-policy"
        assert imported.get("account_id") is None

    async def test_read_keeps_state_account(
        self, resource: Resource, meta: ProviderConfig
    ) -> None:
        created = await resource.create(meta, {"name": "tf-test-policy", "account_id": 777})

        refreshed = await resource.read(meta, created.id, created.to_dict())

        assert refreshed is not None
        assert refreshed.get("account_id") == 777

    async def test_invalid_id(self, resource: Resource, meta: ProviderConfig) -> None:
        with pytest.raises(ValueError, match="invalid alert policy ID"):
            await resource.read(meta, "abc")
