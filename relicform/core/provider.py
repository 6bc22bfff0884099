"""Provider-wide client handles shared by every resource handler."""

from dataclasses import dataclass

from .ports import AlertsPort, EntitiesPort, SyntheticsPort
from .schema import ResourceData


@dataclass
class ProviderConfig:
    """Client handles and defaults handed to each handler as `meta`."""

    synthetics: SyntheticsPort
    entities: EntitiesPort
    alerts: AlertsPort
    account_id: int | None = None


def select_account_id(meta: ProviderConfig, d: ResourceData) -> int:
    """Return the resource's account ID, falling back to the provider's.

    Raises:
        ValueError: If neither the resource nor the provider names an account.
    """
    if "account_id" in d.schema:
        account_id, ok = d.get_ok("account_id")
        if ok:
            return int(account_id)
    if meta.account_id:
        return meta.account_id
    raise ValueError(
        "account_id is not set on the resource and no default account is configured"
    )


__all__ = ["ProviderConfig", "select_account_id"]
