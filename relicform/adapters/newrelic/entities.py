"""NerdGraph entities adapter.

Implements EntitiesPort with the `actor { entity(guid) }` query.
"""

import logging
from typing import Any

from relicform.core.models import Entity, MonitorEntity, MonitorSummary, Tag
from relicform.core.ports import EntitiesPort

from .nerdgraph import NerdGraphClient

logger = logging.getLogger(__name__)

SYNTHETIC_MONITOR_TYPENAME = "SyntheticMonitorEntity"

GET_ENTITY_QUERY = """
query($guid: EntityGuid!) {
  actor {
    entity(guid: $guid) {
      __typename
      accountId
      entityType
      guid
      name
      tags {
        key
        values
      }
      ... on SyntheticMonitorEntity {
        monitorId
        monitorType
        period
        monitorSummary {
          status
        }
      }
    }
  }
}
"""


class NerdGraphEntitiesAdapter(EntitiesPort):
    """Entity lookups over NerdGraph."""

    def __init__(self, client: NerdGraphClient):
        self.client = client

    async def get_entity(self, guid: str) -> Entity | None:
        """Return the entity with this GUID, or None if there is none."""
        data = await self.client.query(GET_ENTITY_QUERY, {"guid": guid})
        entity = (data.get("actor") or {}).get("entity")
        if entity is None:
            logger.debug(f"No entity found for GUID {guid}")
            return None
        return self._parse_entity(entity)

    @staticmethod
    def _parse_entity(data: dict[str, Any]) -> Entity:
        common = {
            "guid": data.get("guid", ""),
            "name": data.get("name", ""),
            "account_id": data.get("accountId") or 0,
            "entity_type": data.get("entityType", ""),
            "tags": tuple(
                Tag(key=tag["key"], values=tuple(tag.get("values") or ()))
                for tag in data.get("tags") or []
            ),
        }

        if data.get("__typename") != SYNTHETIC_MONITOR_TYPENAME:
            return Entity(**common)

        summary = data.get("monitorSummary") or {}
        return MonitorEntity(
            **common,
            monitor_id=data.get("monitorId") or "",
            monitor_type=data.get("monitorType") or "",
            period=float(data.get("period") or 0),
            monitor_summary=MonitorSummary(status=summary.get("status") or ""),
        )
