"""Core resource handler logic for relicform.

This package contains zero external dependencies: schemas, expand/flatten
mappings and lifecycle handlers. Talking to New Relic is left to the
adapters package through the ports defined in core.ports.
"""

from .models import (
    AlertPolicy,
    CertCheckMonitor,
    CertCheckMonitorInput,
    CertCheckMonitorResult,
    Entity,
    IncidentPreference,
    MonitorEntity,
    MonitorLocations,
    MonitorPeriod,
    MonitorRuntime,
    MonitorStatus,
    MonitorSummary,
    ResponseError,
    SyntheticsCondition,
    Tag,
)

__all__ = [
    "AlertPolicy",
    "CertCheckMonitor",
    "CertCheckMonitorInput",
    "CertCheckMonitorResult",
    "Entity",
    "IncidentPreference",
    "MonitorEntity",
    "MonitorLocations",
    "MonitorPeriod",
    "MonitorRuntime",
    "MonitorStatus",
    "MonitorSummary",
    "ResponseError",
    "SyntheticsCondition",
    "Tag",
]
