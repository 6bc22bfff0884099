"""Domain models for the relicform resource handlers.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain. They are the
normalized shapes exchanged between resource handlers and API client
adapters: not NerdGraph payloads, not REST bodies.
"""

from dataclasses import dataclass, field
from enum import Enum


class MonitorStatus(Enum):
    """Synthetic monitor states accepted by the API."""

    ENABLED = "ENABLED"
    DISABLED = "DISABLED"


class MonitorPeriod(Enum):
    """Intervals at which a synthetic monitor runs."""

    EVERY_MINUTE = "EVERY_MINUTE"
    EVERY_5_MINUTES = "EVERY_5_MINUTES"
    EVERY_10_MINUTES = "EVERY_10_MINUTES"
    EVERY_15_MINUTES = "EVERY_15_MINUTES"
    EVERY_30_MINUTES = "EVERY_30_MINUTES"
    EVERY_HOUR = "EVERY_HOUR"
    EVERY_6_HOURS = "EVERY_6_HOURS"
    EVERY_12_HOURS = "EVERY_12_HOURS"
    EVERY_DAY = "EVERY_DAY"

    @property
    def minutes(self) -> int:
        """Length of the period in minutes."""
        return PERIOD_MINUTES[self]

    @classmethod
    def from_minutes(cls, minutes: int) -> "MonitorPeriod | None":
        """Return the period lasting exactly `minutes`, if any."""
        for period, value in PERIOD_MINUTES.items():
            if value == minutes:
                return period
        return None


PERIOD_MINUTES: dict[MonitorPeriod, int] = {
    MonitorPeriod.EVERY_MINUTE: 1,
    MonitorPeriod.EVERY_5_MINUTES: 5,
    MonitorPeriod.EVERY_10_MINUTES: 10,
    MonitorPeriod.EVERY_15_MINUTES: 15,
    MonitorPeriod.EVERY_30_MINUTES: 30,
    MonitorPeriod.EVERY_HOUR: 60,
    MonitorPeriod.EVERY_6_HOURS: 360,
    MonitorPeriod.EVERY_12_HOURS: 720,
    MonitorPeriod.EVERY_DAY: 1440,
}


class IncidentPreference(Enum):
    """How an alert policy groups violations into incidents."""

    PER_POLICY = "PER_POLICY"
    PER_CONDITION = "PER_CONDITION"
    PER_CONDITION_AND_TARGET = "PER_CONDITION_AND_TARGET"


@dataclass(frozen=True)
class Tag:
    """A key with one or more values attached to an entity."""

    key: str
    values: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate tag invariants on creation."""
        if not self.key or not self.key.strip():
            raise ValueError("tag key must be a non-empty string")


@dataclass(frozen=True)
class MonitorLocations:
    """Public and private locations a monitor runs from."""

    public: tuple[str, ...] = ()
    private: tuple[str, ...] = ()


@dataclass(frozen=True)
class MonitorRuntime:
    """Runtime a monitor executes on.

    Both fields empty means the legacy runtime.
    """

    runtime_type: str = ""
    runtime_type_version: str = ""

    @property
    def is_legacy(self) -> bool:
        return not self.runtime_type and not self.runtime_type_version


@dataclass(frozen=True)
class CertCheckMonitorInput:
    """Request body for creating or updating a cert check monitor."""

    name: str
    domain: str
    number_days_to_fail_before_cert_expires: int
    period: MonitorPeriod
    status: MonitorStatus
    locations: MonitorLocations
    runtime: MonitorRuntime = field(default_factory=MonitorRuntime)
    tags: tuple[Tag, ...] = ()


@dataclass(frozen=True)
class CertCheckMonitor:
    """A cert check monitor as returned by a create or update mutation."""

    guid: str
    id: str
    name: str
    domain: str
    number_days_to_fail_before_cert_expires: int
    period: MonitorPeriod
    status: MonitorStatus
    locations: MonitorLocations
    runtime: MonitorRuntime = field(default_factory=MonitorRuntime)
    tags: tuple[Tag, ...] = ()


@dataclass(frozen=True)
class ResponseError:
    """A typed error embedded in a mutation payload."""

    type: str
    description: str

    def __str__(self) -> str:
        return f"{self.type}: {self.description}"


@dataclass(frozen=True)
class CertCheckMonitorResult:
    """Payload of a cert check monitor create/update mutation."""

    monitor: CertCheckMonitor | None
    errors: tuple[ResponseError, ...] = ()


@dataclass(frozen=True)
class MonitorSummary:
    status: str = ""


@dataclass(frozen=True)
class Entity:
    """Any entity returned by an entity lookup.

    Only synthetic monitor entities carry monitor-specific fields; see
    MonitorEntity.
    """

    guid: str
    name: str
    account_id: int
    entity_type: str
    tags: tuple[Tag, ...] = ()

    def tag_values(self, key: str) -> tuple[str, ...]:
        """Return the values of the first tag named `key`."""
        for tag in self.tags:
            if tag.key == key:
                return tag.values
        return ()


@dataclass(frozen=True)
class MonitorEntity(Entity):
    """A synthetic monitor entity.

    `period` is expressed in minutes, as the entity search API reports it.
    """

    monitor_id: str = ""
    monitor_type: str = ""
    period: float = 0.0
    monitor_summary: MonitorSummary = field(default_factory=MonitorSummary)


@dataclass(frozen=True)
class SyntheticsCondition:
    """An alert condition that fires when a synthetic monitor fails."""

    name: str
    monitor_id: str
    enabled: bool = True
    runbook_url: str = ""
    id: int | None = None


@dataclass(frozen=True)
class AlertPolicy:
    """An alert policy grouping conditions."""

    name: str
    incident_preference: IncidentPreference = IncidentPreference.PER_POLICY
    id: int | None = None
