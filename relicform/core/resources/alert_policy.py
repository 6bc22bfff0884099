"""Handlers for `newrelic_alert_policy`."""

import logging

from ..errors import NotFoundError
from ..models import AlertPolicy, IncidentPreference
from ..provider import ProviderConfig, select_account_id
from ..schema import Attribute, AttributeType, Resource, ResourceData, string_in_slice

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "newrelic_alert_policy"

SCHEMA = {
    "name": Attribute(
        type=AttributeType.STRING,
        required=True,
        description="The name of the policy.",
    ),
    "incident_preference": Attribute(
        type=AttributeType.STRING,
        optional=True,
        default=IncidentPreference.PER_POLICY.value,
        validators=(string_in_slice(p.value for p in IncidentPreference),),
        description=(
            "The rollup strategy for the policy. Options include: PER_POLICY, "
            "PER_CONDITION, or PER_CONDITION_AND_TARGET. The default is PER_POLICY."
        ),
    ),
    "account_id": Attribute(
        type=AttributeType.INT,
        optional=True,
        computed=True,
        description="The New Relic account ID to operate on.",
    ),
}


def expand_alert_policy(d: ResourceData) -> AlertPolicy:
    return AlertPolicy(
        name=d.get("name"),
        incident_preference=IncidentPreference(d.get("incident_preference")),
    )


def flatten_alert_policy(d: ResourceData, policy: AlertPolicy) -> None:
    d.set("name", policy.name)
    d.set("incident_preference", policy.incident_preference.value)


def _policy_id(d: ResourceData) -> int:
    try:
        return int(d.id)
    except ValueError:
        raise ValueError(f"invalid alert policy ID {d.id!r}") from None


async def create(d: ResourceData, meta: ProviderConfig) -> None:
    account_id = select_account_id(meta, d)
    policy = expand_alert_policy(d)

    logger.info(f"Creating New Relic alert policy {policy.name}")

    created = await meta.alerts.create_policy(policy)

    d.set_id(str(created.id))
    d.set("account_id", account_id)
    flatten_alert_policy(d, created)


async def read(d: ResourceData, meta: ProviderConfig) -> None:
    logger.info(f"Reading New Relic alert policy {d.id}")

    try:
        policy = await meta.alerts.get_policy(_policy_id(d))
    except NotFoundError:
        d.set_id("")
        return

    # REST v2 policies are not account scoped; keep whatever account is known
    _, has_account = d.get_ok("account_id")
    if not has_account and meta.account_id:
        d.set("account_id", meta.account_id)
    flatten_alert_policy(d, policy)


async def update(d: ResourceData, meta: ProviderConfig) -> None:
    policy = expand_alert_policy(d)

    logger.info(f"Updating New Relic alert policy {d.id}")

    updated = await meta.alerts.update_policy(
        AlertPolicy(
            id=_policy_id(d),
            name=policy.name,
            incident_preference=policy.incident_preference,
        )
    )

    flatten_alert_policy(d, updated)


async def delete(d: ResourceData, meta: ProviderConfig) -> None:
    logger.info(f"Deleting New Relic alert policy {d.id}")
    await meta.alerts.delete_policy(_policy_id(d))


def resource() -> Resource:
    return Resource(
        schema=SCHEMA,
        create=create,
        read=read,
        update=update,
        delete=delete,
    )


def resource_mapping() -> dict[str, Resource]:
    return {RESOURCE_TYPE: resource()}
