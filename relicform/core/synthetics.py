"""Shared schema pieces and expand/flatten helpers for synthetic monitors.

Expand functions turn ResourceData into API inputs; flatten functions copy
API responses back into ResourceData.
"""

import logging
from collections.abc import Mapping
from typing import Any

from .models import (
    Entity,
    MonitorLocations,
    MonitorPeriod,
    MonitorRuntime,
    MonitorStatus,
    Tag,
)
from .schema import Attribute, AttributeType, ResourceData, string_in_slice

logger = logging.getLogger(__name__)

USE_LEGACY_RUNTIME_ATTR = "use_unsupported_legacy_runtime"

USE_LEGACY_RUNTIME_SCHEMA = Attribute(
    type=AttributeType.BOOL,
    optional=True,
    default=False,
    description=(
        "Run the monitor on the unsupported legacy runtime. Required when "
        "`runtime_type` and `runtime_type_version` are omitted."
    ),
)


def valid_monitor_periods() -> list[str]:
    return [period.value for period in MonitorPeriod]


validate_monitor_status = string_in_slice(status.value for status in MonitorStatus)
validate_monitor_period = string_in_slice(valid_monitor_periods())


TAG_SCHEMA: Mapping[str, Attribute] = {
    "key": Attribute(
        type=AttributeType.STRING,
        required=True,
        description="Name of the tag key",
    ),
    "values": Attribute(
        type=AttributeType.LIST,
        elem=AttributeType.STRING,
        required=True,
        description="Values associated with the tag key",
    ),
}


def expand_tags(items: list[Mapping[str, Any]] | None) -> tuple[Tag, ...]:
    return tuple(
        Tag(key=item["key"], values=tuple(item.get("values") or ()))
        for item in items or ()
    )


def flatten_tags(tags: tuple[Tag, ...]) -> list[dict[str, Any]]:
    return [{"key": tag.key, "values": list(tag.values)} for tag in tags]


def expand_monitor_base(d: ResourceData) -> dict[str, Any]:
    """Return the name, period, status and tags every monitor input carries."""
    return {
        "name": d.get("name"),
        "period": MonitorPeriod(d.get("period")),
        "status": MonitorStatus(d.get("status")),
        "tags": expand_tags(d.get("tag")),
    }


def expand_locations(d: ResourceData) -> MonitorLocations:
    public, _ = d.get_ok("locations_public")
    private, _ = d.get_ok("locations_private")
    return MonitorLocations(public=tuple(public or ()), private=tuple(private or ()))


def expand_runtime(d: ResourceData) -> MonitorRuntime:
    """Build the runtime input.

    Raises:
        ValueError: If only one of runtime_type and runtime_type_version is set.
    """
    runtime_type, runtime_type_ok = d.get_ok("runtime_type")
    version, version_ok = d.get_ok("runtime_type_version")

    if runtime_type_ok or version_ok:
        if not (runtime_type_ok and version_ok):
            raise ValueError(
                "both `runtime_type` and `runtime_type_version` are to be specified"
            )
        return MonitorRuntime(runtime_type=runtime_type, runtime_type_version=version)

    return MonitorRuntime()


def validate_runtime_attributes(d: ResourceData) -> list[str]:
    """Cross-attribute checks on the runtime of a monitor."""
    runtime_type, runtime_type_ok = d.get_ok("runtime_type")
    _, version_ok = d.get_ok("runtime_type_version")
    legacy, _ = d.get_ok(USE_LEGACY_RUNTIME_ATTR)

    if runtime_type_ok != version_ok:
        return ["both `runtime_type` and `runtime_type_version` are to be specified"]

    if legacy and runtime_type_ok:
        return [
            f"`{USE_LEGACY_RUNTIME_ATTR}` cannot be true while `runtime_type` "
            f"({runtime_type}) and `runtime_type_version` are specified"
        ]

    if not legacy and not runtime_type_ok:
        return [
            "`runtime_type` and `runtime_type_version` are required; to keep "
            f"using the legacy runtime set `{USE_LEGACY_RUNTIME_ATTR}` to true"
        ]

    return []


def set_monitor_attributes(d: ResourceData, values: Mapping[str, Any]) -> None:
    for key, value in values.items():
        d.set(key, value)


def period_from_minutes(minutes: float) -> str:
    """Map an entity's period in minutes back to its period name."""
    period = MonitorPeriod.from_minutes(int(minutes))
    return period.value if period else ""


def public_locations_from_entity_tags(entity: Entity) -> list[str]:
    return list(entity.tag_values("publicLocation"))


def runtime_values_from_entity_tags(entity: Entity) -> tuple[str, str]:
    runtime_type = entity.tag_values("runtimeType")
    version = entity.tag_values("runtimeTypeVersion")
    return (
        runtime_type[0] if runtime_type else "",
        version[0] if version else "",
    )


def cert_check_values_from_entity_tags(entity: Entity) -> tuple[str, int]:
    """Return the monitored domain and days-until-expiration from entity tags."""
    domain = entity.tag_values("domain")
    days = entity.tag_values("daysUntilExpiration")
    try:
        days_until_expiration = int(days[0]) if days else 0
    except ValueError:
        logger.warning(f"Ignoring non-numeric daysUntilExpiration tag on {entity.guid}: {days[0]}")
        days_until_expiration = 0
    return domain[0] if domain else "", days_until_expiration
