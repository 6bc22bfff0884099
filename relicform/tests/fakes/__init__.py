"""Fake implementations of core ports for testing.

These in-memory implementations allow resource handlers to be tested
without calling New Relic:

- FakeSyntheticsPort: In-memory monitors, optionally mirrored as entities
- FakeEntitiesPort: In-memory entity index
- FakeAlertsPort: In-memory policies and synthetics conditions
"""

from relicform.core.provider import ProviderConfig

from .alerts import FakeAlertsPort
from .entities import FakeEntitiesPort
from .synthetics import FakeSyntheticsPort


def fake_provider_config(account_id: int | None = 12345) -> ProviderConfig:
    """Build a ProviderConfig wired to fresh, linked fakes."""
    entities = FakeEntitiesPort()
    return ProviderConfig(
        synthetics=FakeSyntheticsPort(entities=entities, account_id=account_id or 0),
        entities=entities,
        alerts=FakeAlertsPort(),
        account_id=account_id,
    )


__all__ = [
    "FakeAlertsPort",
    "FakeEntitiesPort",
    "FakeSyntheticsPort",
    "fake_provider_config",
]
