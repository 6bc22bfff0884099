"""Handlers for `newrelic_synthetics_alert_condition`.

The condition opens a violation when its synthetic monitor fails. The
resource ID joins the owning policy and the condition: `<policy_id>:<id>`.
"""

import logging

from ..errors import NotFoundError
from ..ids import parse_ids, serialize_ids
from ..models import SyntheticsCondition
from ..provider import ProviderConfig
from ..schema import Attribute, AttributeType, Resource, ResourceData

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "newrelic_synthetics_alert_condition"

SCHEMA = {
    "policy_id": Attribute(
        type=AttributeType.INT,
        required=True,
        force_new=True,
        description="The ID of the policy where this condition should be used.",
    ),
    "name": Attribute(
        type=AttributeType.STRING,
        required=True,
        description="The title of this condition.",
    ),
    "monitor_id": Attribute(
        type=AttributeType.STRING,
        required=True,
        force_new=True,
        description="The ID of the Synthetics monitor to be referenced in the alert condition.",
    ),
    "runbook_url": Attribute(
        type=AttributeType.STRING,
        optional=True,
        description="Runbook URL to display in notifications.",
    ),
    "enabled": Attribute(
        type=AttributeType.BOOL,
        optional=True,
        default=True,
        description="Set whether to enable the alert condition. Defaults to true.",
    ),
}


def expand_synthetics_condition(d: ResourceData) -> SyntheticsCondition:
    runbook_url, _ = d.get_ok("runbook_url")
    return SyntheticsCondition(
        name=d.get("name"),
        monitor_id=d.get("monitor_id"),
        enabled=bool(d.get("enabled")),
        runbook_url=runbook_url or "",
    )


def flatten_synthetics_condition(
    d: ResourceData, policy_id: int, condition: SyntheticsCondition
) -> None:
    d.set("policy_id", policy_id)
    d.set("name", condition.name)
    d.set("monitor_id", condition.monitor_id)
    d.set("enabled", condition.enabled)
    d.set("runbook_url", condition.runbook_url)


async def create(d: ResourceData, meta: ProviderConfig) -> None:
    policy_id = d.get("policy_id")
    condition = expand_synthetics_condition(d)

    logger.info(f"Creating New Relic Synthetics alert condition {condition.name}")

    created = await meta.alerts.create_synthetics_condition(policy_id, condition)

    d.set_id(serialize_ids([policy_id, created.id]))
    flatten_synthetics_condition(d, policy_id, created)


async def read(d: ResourceData, meta: ProviderConfig) -> None:
    logger.info(f"Reading New Relic Synthetics alert condition {d.id}")

    policy_id, condition_id = parse_ids(d.id, 2)

    try:
        condition = await meta.alerts.get_synthetics_condition(policy_id, condition_id)
    except NotFoundError:
        d.set_id("")
        return

    flatten_synthetics_condition(d, policy_id, condition)


async def update(d: ResourceData, meta: ProviderConfig) -> None:
    policy_id, condition_id = parse_ids(d.id, 2)
    condition = expand_synthetics_condition(d)

    logger.info(f"Updating New Relic Synthetics alert condition {d.id}")

    updated = await meta.alerts.update_synthetics_condition(
        SyntheticsCondition(
            id=condition_id,
            name=condition.name,
            monitor_id=condition.monitor_id,
            enabled=condition.enabled,
            runbook_url=condition.runbook_url,
        )
    )

    flatten_synthetics_condition(d, policy_id, updated)


async def delete(d: ResourceData, meta: ProviderConfig) -> None:
    _, condition_id = parse_ids(d.id, 2)

    logger.info(f"Deleting New Relic Synthetics alert condition {d.id}")

    await meta.alerts.delete_synthetics_condition(condition_id)


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
