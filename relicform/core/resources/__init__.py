"""Resource handlers, one module per resource type.

Each module exposes `resource_mapping()`, returning its resource type
name(s) and Resource definition(s).
"""

from . import alert_policy, synthetics_alert_condition, synthetics_cert_check_monitor
from ..schema import Resource

RESOURCE_MODULES = (
    alert_policy,
    synthetics_alert_condition,
    synthetics_cert_check_monitor,
)


def resource_mapping() -> dict[str, Resource]:
    """Return every resource type this package implements."""
    mapping: dict[str, Resource] = {}
    for module in RESOURCE_MODULES:
        mapping.update(module.resource_mapping())
    return mapping


__all__ = ["RESOURCE_MODULES", "resource_mapping"]
