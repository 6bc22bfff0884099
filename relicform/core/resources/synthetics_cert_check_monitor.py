"""Handlers for `newrelic_synthetics_cert_check_monitor`.

A cert check monitor periodically connects to a domain and fails when its
TLS certificate expires within `certificate_expiration` days.
"""

import logging

from ..errors import NewRelicError, ResponseErrorsError
from ..models import (
    CertCheckMonitor,
    CertCheckMonitorInput,
    CertCheckMonitorResult,
    MonitorEntity,
)
from ..provider import ProviderConfig, select_account_id
from ..schema import Attribute, AttributeType, Resource, ResourceData
from ..synthetics import (
    TAG_SCHEMA,
    USE_LEGACY_RUNTIME_ATTR,
    USE_LEGACY_RUNTIME_SCHEMA,
    cert_check_values_from_entity_tags,
    expand_locations,
    expand_monitor_base,
    expand_runtime,
    period_from_minutes,
    public_locations_from_entity_tags,
    runtime_values_from_entity_tags,
    set_monitor_attributes,
    validate_monitor_period,
    validate_monitor_status,
    validate_runtime_attributes,
)

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "newrelic_synthetics_cert_check_monitor"

LOCATIONS = ("locations_public", "locations_private")

SCHEMA = {
    "account_id": Attribute(
        type=AttributeType.INT,
        optional=True,
        computed=True,
        description="ID of the newrelic account",
    ),
    "monitor_id": Attribute(
        type=AttributeType.STRING,
        computed=True,
        description="ID of the monitor",
    ),
    "name": Attribute(
        type=AttributeType.STRING,
        required=True,
        description="name of the cert check monitor",
    ),
    "domain": Attribute(
        type=AttributeType.STRING,
        required=True,
        description="The domain of the host that will have its certificate checked.",
    ),
    "certificate_expiration": Attribute(
        type=AttributeType.INT,
        required=True,
        description="Days remaining before the certificate expires at which the monitor fails.",
    ),
    "locations_public": Attribute(
        type=AttributeType.SET,
        elem=AttributeType.STRING,
        optional=True,
        min_items=1,
        at_least_one_of=LOCATIONS,
        description="The locations in which this monitor should be run.",
    ),
    "locations_private": Attribute(
        type=AttributeType.SET,
        elem=AttributeType.STRING,
        optional=True,
        min_items=1,
        at_least_one_of=LOCATIONS,
        description="The locations in which this monitor should be run.",
    ),
    "status": Attribute(
        type=AttributeType.STRING,
        required=True,
        validators=(validate_monitor_status,),
        description="The monitor status (ENABLED or DISABLED).",
    ),
    "tag": Attribute(
        type=AttributeType.SET,
        elem=TAG_SCHEMA,
        optional=True,
        min_items=1,
        description="The tags that will be associated with the monitor",
    ),
    "period": Attribute(
        type=AttributeType.STRING,
        required=True,
        validators=(validate_monitor_period,),
        description=(
            "The interval at which this monitor should run. Valid values are "
            "EVERY_MINUTE, EVERY_5_MINUTES, EVERY_10_MINUTES, EVERY_15_MINUTES, "
            "EVERY_30_MINUTES, EVERY_HOUR, EVERY_6_HOURS, EVERY_12_HOURS, or EVERY_DAY."
        ),
    ),
    "period_in_minutes": Attribute(
        type=AttributeType.INT,
        computed=True,
        description="The interval in minutes at which this monitor should run.",
    ),
    "runtime_type": Attribute(
        type=AttributeType.STRING,
        optional=True,
        description="The runtime type that the monitor will run.",
    ),
    "runtime_type_version": Attribute(
        type=AttributeType.STRING,
        optional=True,
        description="The specific semver version of the runtime type.",
    ),
    USE_LEGACY_RUNTIME_ATTR: USE_LEGACY_RUNTIME_SCHEMA,
}


def build_cert_check_monitor_input(d: ResourceData) -> CertCheckMonitorInput:
    """Expand configuration into the create/update mutation input.

    Raises:
        ValueError: If the runtime attributes are only partially set.
    """
    base = expand_monitor_base(d)
    domain, _ = d.get_ok("domain")
    days, _ = d.get_ok("certificate_expiration")

    return CertCheckMonitorInput(
        name=base["name"],
        period=base["period"],
        status=base["status"],
        tags=base["tags"],
        locations=expand_locations(d),
        domain=domain or "",
        number_days_to_fail_before_cert_expires=days or 0,
        runtime=expand_runtime(d),
    )


def flatten_cert_check_monitor(d: ResourceData, monitor: CertCheckMonitor) -> None:
    d.set("certificate_expiration", monitor.number_days_to_fail_before_cert_expires)
    d.set("locations_public", monitor.locations.public)
    d.set("locations_private", monitor.locations.private)
    d.set("period_in_minutes", monitor.period.minutes)

    if monitor.runtime.runtime_type:
        d.set("runtime_type", monitor.runtime.runtime_type)
    if monitor.runtime.runtime_type_version:
        d.set("runtime_type_version", monitor.runtime.runtime_type_version)

    set_monitor_attributes(
        d,
        {
            "domain": monitor.domain,
            "name": monitor.name,
            "period": monitor.period.value,
            "status": monitor.status.value,
        },
    )


def _checked_monitor(
    result: CertCheckMonitorResult | None, operation: str
) -> CertCheckMonitor:
    if result is None:
        raise NewRelicError(
            f"no response received from NerdGraph: failed to {operation} cert check monitor"
        )
    if result.errors:
        raise ResponseErrorsError(result.errors)
    if result.monitor is None:
        raise NewRelicError(
            f"NerdGraph returned no monitor: failed to {operation} cert check monitor"
        )
    return result.monitor


async def create(d: ResourceData, meta: ProviderConfig) -> None:
    account_id = select_account_id(meta, d)
    monitor_input = build_cert_check_monitor_input(d)

    result = await meta.synthetics.create_cert_check_monitor(account_id, monitor_input)
    monitor = _checked_monitor(result, "create")

    d.set_id(monitor.guid)
    d.set("account_id", account_id)
    d.set("monitor_id", monitor.id)
    flatten_cert_check_monitor(d, monitor)


async def read(d: ResourceData, meta: ProviderConfig) -> None:
    logger.info(f"Reading New Relic Synthetics monitor {d.id}")

    entity = await meta.entities.get_entity(d.id)
    if entity is None:
        d.set_id("")
        return

    if not isinstance(entity, MonitorEntity):
        logger.warning(
            f"Entity {d.id} is a {entity.entity_type}, not a synthetic monitor; leaving state untouched"
        )
        return

    d.set_id(entity.guid)
    d.set("account_id", entity.account_id or select_account_id(meta, d))
    d.set("locations_public", public_locations_from_entity_tags(entity))
    d.set("period_in_minutes", int(entity.period))

    set_monitor_attributes(
        d,
        {
            "name": entity.name,
            "period": period_from_minutes(entity.period),
            "status": entity.monitor_summary.status,
            "monitor_id": entity.monitor_id,
        },
    )

    runtime_type, runtime_type_version = runtime_values_from_entity_tags(entity)
    if runtime_type and runtime_type_version:
        d.set("runtime_type", runtime_type)
        d.set("runtime_type_version", runtime_type_version)

    domain, days_until_expiration = cert_check_values_from_entity_tags(entity)
    if domain and days_until_expiration:
        d.set("domain", domain)
        d.set("certificate_expiration", days_until_expiration)


async def update(d: ResourceData, meta: ProviderConfig) -> None:
    monitor_input = build_cert_check_monitor_input(d)

    result = await meta.synthetics.update_cert_check_monitor(d.id, monitor_input)
    monitor = _checked_monitor(result, "update")

    flatten_cert_check_monitor(d, monitor)


async def delete(d: ResourceData, meta: ProviderConfig) -> None:
    logger.info(f"Deleting New Relic Synthetics monitor {d.id}")
    await meta.synthetics.delete_monitor(d.id)


def resource() -> Resource:
    return Resource(
        schema=SCHEMA,
        create=create,
        read=read,
        update=update,
        delete=delete,
        customize_diff=validate_runtime_attributes,
    )


def resource_mapping() -> dict[str, Resource]:
    return {RESOURCE_TYPE: resource()}
