"""Port interfaces for the relicform resource handlers.

These abstract base classes define the boundaries between resource
handlers and the New Relic API client adapters. Implementations live in
the adapters/ package.

Port Interface Categories:

1. **Driven Ports** (handlers call out to adapters)
   - SyntheticsPort: Create, update and delete synthetic monitors
   - EntitiesPort: Look up entities by GUID
   - AlertsPort: Manage alert policies and synthetics alert conditions
"""

from abc import ABC, abstractmethod

from .models import (
    AlertPolicy,
    CertCheckMonitorInput,
    CertCheckMonitorResult,
    Entity,
    SyntheticsCondition,
)


class SyntheticsPort(ABC):
    """Port for synthetic monitor mutations.

    Adapters implementing this port talk to NerdGraph and normalize
    mutation payloads into CertCheckMonitorResult. Typed payload errors
    are returned in the result, not raised; transport failures and
    top-level GraphQL errors are raised.
    """

    @abstractmethod
    async def create_cert_check_monitor(
        self, account_id: int, monitor: CertCheckMonitorInput
    ) -> CertCheckMonitorResult | None:
        """Create a cert check monitor in an account.

        Args:
            account_id: Account that will own the monitor.
            monitor: Desired monitor attributes.

        Returns:
            The mutation payload, or None if NerdGraph returned no payload.

        Raises:
            Exception: If NerdGraph is unreachable or rejects the request.
        """

    @abstractmethod
    async def update_cert_check_monitor(
        self, guid: str, monitor: CertCheckMonitorInput
    ) -> CertCheckMonitorResult | None:
        """Replace the attributes of an existing cert check monitor.

        Args:
            guid: Entity GUID of the monitor.
            monitor: Desired monitor attributes.

        Returns:
            The mutation payload, or None if NerdGraph returned no payload.

        Raises:
            Exception: If NerdGraph is unreachable or rejects the request.
        """

    @abstractmethod
    async def delete_monitor(self, guid: str) -> str:
        """Delete a synthetic monitor of any type.

        Args:
            guid: Entity GUID of the monitor.

        Returns:
            The GUID reported as deleted.

        Raises:
            Exception: If NerdGraph is unreachable or rejects the request.
        """


class EntitiesPort(ABC):
    """Port for entity lookups."""

    @abstractmethod
    async def get_entity(self, guid: str) -> Entity | None:
        """Retrieve an entity by GUID.

        Args:
            guid: Entity GUID.

        Returns:
            MonitorEntity for synthetic monitors, a plain Entity for other
            entity types, or None if no entity has this GUID.

        Raises:
            Exception: If NerdGraph is unreachable.
        """


class AlertsPort(ABC):
    """Port for alert policies and synthetics alert conditions.

    Lookups of objects that do not exist (including conditions whose
    policy was deleted) must raise NotFoundError so handlers can drop
    them from state.
    """

    @abstractmethod
    async def create_policy(self, policy: AlertPolicy) -> AlertPolicy:
        """Create an alert policy and return it with its ID."""

    @abstractmethod
    async def get_policy(self, policy_id: int) -> AlertPolicy:
        """Retrieve an alert policy.

        Raises:
            NotFoundError: If no policy has this ID.
        """

    @abstractmethod
    async def update_policy(self, policy: AlertPolicy) -> AlertPolicy:
        """Update an alert policy. `policy.id` must be set."""

    @abstractmethod
    async def delete_policy(self, policy_id: int) -> None:
        """Delete an alert policy."""

    @abstractmethod
    async def create_synthetics_condition(
        self, policy_id: int, condition: SyntheticsCondition
    ) -> SyntheticsCondition:
        """Create a synthetics alert condition in a policy.

        Args:
            policy_id: Policy that will own the condition.
            condition: Desired condition attributes.

        Returns:
            The created condition with its ID.

        Raises:
            NotFoundError: If the policy does not exist.
        """

    @abstractmethod
    async def get_synthetics_condition(
        self, policy_id: int, condition_id: int
    ) -> SyntheticsCondition:
        """Retrieve a synthetics alert condition.

        Raises:
            NotFoundError: If the policy or the condition does not exist.
        """

    @abstractmethod
    async def update_synthetics_condition(
        self, condition: SyntheticsCondition
    ) -> SyntheticsCondition:
        """Update a synthetics alert condition. `condition.id` must be set."""

    @abstractmethod
    async def delete_synthetics_condition(self, condition_id: int) -> None:
        """Delete a synthetics alert condition."""
