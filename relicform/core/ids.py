"""Composite resource IDs of the form `<a>:<b>`."""


def parse_ids(resource_id: str, count: int) -> list[int]:
    """Split a composite ID into its integer parts.

    Raises:
        ValueError: If the ID does not have exactly `count` integer parts.
    """
    parts = resource_id.split(":")
    if len(parts) != count:
        raise ValueError(
            f"unable to parse ID {resource_id!r}: expected {count} parts separated by ':'"
        )
    try:
        return [int(part) for part in parts]
    except ValueError:
        raise ValueError(f"unable to parse ID {resource_id!r}: parts must be integers") from None


def serialize_ids(ids: list[int]) -> str:
    return ":".join(str(i) for i in ids)


__all__ = ["parse_ids", "serialize_ids"]
