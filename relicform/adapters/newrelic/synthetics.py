"""NerdGraph synthetics adapter.

Implements SyntheticsPort with the `syntheticsCreateCertCheckMonitor`,
`syntheticsUpdateCertCheckMonitor` and `syntheticsDeleteMonitor` mutations.
"""

import logging
from typing import Any

from relicform.core.models import (
    CertCheckMonitor,
    CertCheckMonitorInput,
    CertCheckMonitorResult,
    MonitorLocations,
    MonitorPeriod,
    MonitorRuntime,
    MonitorStatus,
    ResponseError,
    Tag,
)
from relicform.core.ports import SyntheticsPort

from .nerdgraph import NerdGraphClient

logger = logging.getLogger(__name__)

CERT_CHECK_MONITOR_PAYLOAD = """
    errors {
      description
      type
    }
    monitor {
      domain
      guid
      id
      locations {
        private
        public
      }
      name
      numberDaysToFailBeforeCertExpires
      period
      runtime {
        runtimeType
        runtimeTypeVersion
      }
      status
      tags {
        key
        values
      }
    }
"""

CREATE_CERT_CHECK_MONITOR_MUTATION = f"""
mutation($accountId: Int!, $monitor: SyntheticsCreateCertCheckMonitorInput!) {{
  syntheticsCreateCertCheckMonitor(accountId: $accountId, monitor: $monitor) {{
{CERT_CHECK_MONITOR_PAYLOAD}
  }}
}}
"""

UPDATE_CERT_CHECK_MONITOR_MUTATION = f"""
mutation($guid: EntityGuid!, $monitor: SyntheticsUpdateCertCheckMonitorInput!) {{
  syntheticsUpdateCertCheckMonitor(guid: $guid, monitor: $monitor) {{
{CERT_CHECK_MONITOR_PAYLOAD}
  }}
}}
"""

DELETE_MONITOR_MUTATION = """
mutation($guid: EntityGuid!) {
  syntheticsDeleteMonitor(guid: $guid) {
    deletedGuid
  }
}
"""


class NerdGraphSyntheticsAdapter(SyntheticsPort):
    """Synthetic monitor mutations over NerdGraph."""

    def __init__(self, client: NerdGraphClient):
        self.client = client

    async def create_cert_check_monitor(
        self, account_id: int, monitor: CertCheckMonitorInput
    ) -> CertCheckMonitorResult | None:
        """Create a cert check monitor and normalize the payload."""
        data = await self.client.query(
            CREATE_CERT_CHECK_MONITOR_MUTATION,
            {"accountId": account_id, "monitor": self._monitor_variables(monitor)},
        )
        return self._parse_result(data.get("syntheticsCreateCertCheckMonitor"))

    async def update_cert_check_monitor(
        self, guid: str, monitor: CertCheckMonitorInput
    ) -> CertCheckMonitorResult | None:
        """Update a cert check monitor and normalize the payload."""
        data = await self.client.query(
            UPDATE_CERT_CHECK_MONITOR_MUTATION,
            {"guid": guid, "monitor": self._monitor_variables(monitor)},
        )
        return self._parse_result(data.get("syntheticsUpdateCertCheckMonitor"))

    async def delete_monitor(self, guid: str) -> str:
        """Delete a monitor and return the GUID NerdGraph reports as deleted."""
        data = await self.client.query(DELETE_MONITOR_MUTATION, {"guid": guid})
        payload = data.get("syntheticsDeleteMonitor") or {}
        return payload.get("deletedGuid", "")

    @staticmethod
    def _monitor_variables(monitor: CertCheckMonitorInput) -> dict[str, Any]:
        """Serialize a cert check monitor input into mutation variables."""
        locations: dict[str, list[str]] = {}
        if monitor.locations.public:
            locations["public"] = list(monitor.locations.public)
        if monitor.locations.private:
            locations["private"] = list(monitor.locations.private)

        runtime: dict[str, str] = {}
        if monitor.runtime.runtime_type:
            runtime["runtimeType"] = monitor.runtime.runtime_type
        if monitor.runtime.runtime_type_version:
            runtime["runtimeTypeVersion"] = monitor.runtime.runtime_type_version

        variables: dict[str, Any] = {
            "domain": monitor.domain,
            "locations": locations,
            "name": monitor.name,
            "numberDaysToFailBeforeCertExpires": monitor.number_days_to_fail_before_cert_expires,
            "period": monitor.period.value,
            "runtime": runtime,
            "status": monitor.status.value,
        }
        if monitor.tags:
            variables["tags"] = [
                {"key": tag.key, "values": list(tag.values)} for tag in monitor.tags
            ]
        return variables

    def _parse_result(self, payload: dict[str, Any] | None) -> CertCheckMonitorResult | None:
        if payload is None:
            return None

        errors = tuple(
            ResponseError(type=error.get("type", ""), description=error.get("description", ""))
            for error in payload.get("errors") or []
        )
        # failed mutations may echo a monitor with null members
        if errors:
            return CertCheckMonitorResult(monitor=None, errors=errors)

        monitor_data = payload.get("monitor")
        monitor = self._parse_monitor(monitor_data) if monitor_data else None
        return CertCheckMonitorResult(monitor=monitor, errors=errors)

    @staticmethod
    def _parse_monitor(data: dict[str, Any]) -> CertCheckMonitor:
        locations = data.get("locations") or {}
        runtime = data.get("runtime") or {}
        return CertCheckMonitor(
            guid=data.get("guid", ""),
            id=data.get("id", ""),
            name=data.get("name", ""),
            domain=data.get("domain", ""),
            number_days_to_fail_before_cert_expires=data.get(
                "numberDaysToFailBeforeCertExpires", 0
            ),
            period=MonitorPeriod(data["period"]),
            status=MonitorStatus(data["status"]),
            locations=MonitorLocations(
                public=tuple(locations.get("public") or ()),
                private=tuple(locations.get("private") or ()),
            ),
            runtime=MonitorRuntime(
                runtime_type=runtime.get("runtimeType") or "",
                runtime_type_version=runtime.get("runtimeTypeVersion") or "",
            ),
            tags=tuple(
                Tag(key=tag["key"], values=tuple(tag.get("values") or ()))
                for tag in data.get("tags") or []
            ),
        )
