"""Attribute schemas and the resource lifecycle runner.

A Resource couples a schema with the Create/Read/Update/Delete handlers
of one resource type. The runner only validates configuration, builds a
ResourceData and hands it to the handler; it never plans or diffs.

Handler signature::

    async def handler(d: ResourceData, meta: ProviderConfig) -> None

Handlers report failure by raising. Read handlers signal that the remote
object is gone by calling `d.set_id("")`.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeAlias

from .errors import ConfigValidationError, NewRelicError

logger = logging.getLogger(__name__)


class AttributeType(Enum):
    STRING = "string"
    INT = "int"
    BOOL = "bool"
    SET = "set"
    LIST = "list"


Validator: TypeAlias = Callable[[Any, str], list[str]]


@dataclass(frozen=True)
class Attribute:
    """Schema of a single configuration attribute.

    `elem` is the element type of SET and LIST attributes: either a
    scalar AttributeType or a nested schema mapping for blocks.
    """

    type: AttributeType
    description: str = ""
    required: bool = False
    optional: bool = False
    computed: bool = False
    default: Any = None
    elem: "AttributeType | Mapping[str, Attribute] | None" = None
    min_items: int = 0
    at_least_one_of: tuple[str, ...] = ()
    force_new: bool = False
    validators: tuple[Validator, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate attribute declaration on creation."""
        if self.required and (self.optional or self.computed):
            raise ValueError("a required attribute cannot be optional or computed")
        if not (self.required or self.optional or self.computed):
            raise ValueError("attribute must be required, optional or computed")
        if self.type in (AttributeType.SET, AttributeType.LIST) and self.elem is None:
            raise ValueError("collection attributes need an element type")

    @property
    def computed_only(self) -> bool:
        return self.computed and not self.optional


Schema: TypeAlias = Mapping[str, Attribute]


def string_in_slice(valid: Iterable[str], ignore_case: bool = False) -> Validator:
    """Build a validator accepting only the given strings."""
    choices = tuple(valid)
    folded = {c.lower() for c in choices} if ignore_case else set(choices)

    def validate(value: Any, key: str) -> list[str]:
        candidate = value.lower() if ignore_case and isinstance(value, str) else value
        if candidate not in folded:
            return [f"{key}: expected one of {list(choices)}, got {value!r}"]
        return []

    return validate


def _is_zero(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return value == 0


def _matches_type(attr_type: AttributeType, value: Any) -> bool:
    if attr_type == AttributeType.STRING:
        return isinstance(value, str)
    if attr_type == AttributeType.INT:
        return isinstance(value, int) and not isinstance(value, bool)
    if attr_type == AttributeType.BOOL:
        return isinstance(value, bool)
    return isinstance(value, (list, tuple, set, frozenset))


class ResourceData:
    """ID and attribute values of one resource instance.

    Values are normalized on write: sets of strings become sorted lists
    without duplicates, tuples become lists.
    """

    def __init__(
        self,
        schema: Schema,
        attributes: Mapping[str, Any] | None = None,
        resource_id: str = "",
    ):
        self.schema = schema
        self._id = resource_id
        self._attributes: dict[str, Any] = {}
        for key, value in (attributes or {}).items():
            self.set(key, value)

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, resource_id: str) -> None:
        """Set the resource ID. An empty ID marks the resource as gone."""
        self._id = resource_id

    def get(self, key: str) -> Any:
        """Return the value of `key`, or its default when unset."""
        attr = self._attribute(key)
        if key in self._attributes:
            return self._attributes[key]
        return attr.default

    def get_ok(self, key: str) -> tuple[Any, bool]:
        """Return the value of `key` and whether it is set to a non-zero value."""
        value = self.get(key)
        return value, not _is_zero(value)

    def set(self, key: str, value: Any) -> None:
        attr = self._attribute(key)
        self._attributes[key] = self._normalize(attr, value)

    def to_dict(self) -> dict[str, Any]:
        """Return the attribute values, defaults filled in."""
        values = {
            key: attr.default
            for key, attr in self.schema.items()
            if attr.default is not None
        }
        values.update(self._attributes)
        return values

    def _attribute(self, key: str) -> Attribute:
        try:
            return self.schema[key]
        except KeyError:
            raise KeyError(f"unknown attribute {key!r}") from None

    @staticmethod
    def _normalize(attr: Attribute, value: Any) -> Any:
        if value is None:
            return None
        if attr.type == AttributeType.SET:
            items = list(value)
            if isinstance(attr.elem, AttributeType):
                return sorted(set(items))
            return items
        if attr.type == AttributeType.LIST:
            return list(value)
        return value

    def __repr__(self) -> str:
        return f"ResourceData(id={self._id!r}, attributes={self._attributes!r})"


Handler: TypeAlias = Callable[[ResourceData, Any], Awaitable[None]]
DiffCheck: TypeAlias = Callable[[ResourceData], list[str]]


class Resource:
    """Schema and lifecycle handlers of one resource type."""

    def __init__(
        self,
        schema: Schema,
        create: Handler,
        read: Handler,
        update: Handler,
        delete: Handler,
        importable: bool = True,
        customize_diff: DiffCheck | None = None,
    ):
        self.schema = schema
        self._create = create
        self._read = read
        self._update = update
        self._delete = delete
        self.importable = importable
        self._customize_diff = customize_diff

    def validate(self, config: Mapping[str, Any]) -> None:
        """Check a configuration against the schema.

        Raises:
            ConfigValidationError: Listing every violation found.
        """
        problems = _validate_block(self.schema, config, prefix="")
        if self._customize_diff is not None and not problems:
            problems.extend(self._customize_diff(self.data(config)))
        if problems:
            raise ConfigValidationError(problems)

    def data(
        self, config: Mapping[str, Any] | None = None, resource_id: str = ""
    ) -> ResourceData:
        return ResourceData(self.schema, config, resource_id)

    async def create(self, meta: Any, config: Mapping[str, Any]) -> ResourceData:
        self.validate(config)
        d = self.data(config)
        await self._create(d, meta)
        if not d.id:
            raise NewRelicError("create handler finished without setting an ID")
        return d

    async def read(
        self,
        meta: Any,
        resource_id: str,
        state: Mapping[str, Any] | None = None,
    ) -> ResourceData | None:
        """Refresh state from the remote side.

        Returns:
            The refreshed data, or None if the remote object no longer exists.
        """
        d = self.data(state, resource_id)
        await self._read(d, meta)
        if not d.id:
            logger.info(f"Resource {resource_id} no longer exists, removing from state")
            return None
        return d

    async def update(
        self,
        meta: Any,
        resource_id: str,
        config: Mapping[str, Any],
        prior_state: Mapping[str, Any] | None = None,
    ) -> ResourceData:
        """Update a resource in place.

        Computed values from `prior_state` are carried over so handlers can
        rely on them (e.g. IDs assigned at creation).

        Raises:
            ConfigValidationError: If the configuration is invalid or a
                force-new attribute changed.
        """
        self.validate(config)
        prior = dict(prior_state or {})
        replaced = [
            key
            for key, attr in self.schema.items()
            if attr.force_new and key in prior and prior[key] != config.get(key)
        ]
        if replaced:
            raise ConfigValidationError(
                f"{key}: cannot be changed in place, the resource must be replaced"
                for key in replaced
            )
        d = self.data(config, resource_id)
        for key, attr in self.schema.items():
            if attr.computed and key not in config and key in prior:
                d.set(key, prior[key])
        await self._update(d, meta)
        return d

    async def delete(
        self,
        meta: Any,
        resource_id: str,
        state: Mapping[str, Any] | None = None,
    ) -> None:
        await self._delete(self.data(state, resource_id), meta)

    async def import_state(self, meta: Any, resource_id: str) -> ResourceData | None:
        """Import an existing object by ID, then read its state."""
        if not self.importable:
            raise NewRelicError("resource does not support import")
        return await self.read(meta, resource_id)


def _validate_block(
    schema: Schema, config: Mapping[str, Any], prefix: str
) -> list[str]:
    problems: list[str] = []

    for key in config:
        if key not in schema:
            problems.append(f"{prefix}{key}: unsupported attribute")

    for key, attr in schema.items():
        name = f"{prefix}{key}"
        value = config.get(key)

        if value is None:
            if attr.required:
                problems.append(f"{name}: required attribute is not set")
            continue

        if attr.computed_only:
            problems.append(f"{name}: attribute is computed and cannot be set")
            continue

        if not _matches_type(attr.type, value):
            problems.append(f"{name}: expected {attr.type.value}, got {type(value).__name__}")
            continue

        if attr.type in (AttributeType.SET, AttributeType.LIST):
            problems.extend(_validate_items(attr, name, list(value)))

        for validator in attr.validators:
            problems.extend(validator(value, name))

    # the same group is declared on each of its members; report it once
    reported: set[frozenset[str]] = set()
    for key, attr in schema.items():
        group = frozenset(attr.at_least_one_of)
        if not group or group in reported:
            continue
        if all(_is_zero(config.get(other)) for other in attr.at_least_one_of):
            reported.add(group)
            problems.append(
                f"{prefix}{key}: one of {list(attr.at_least_one_of)} must be specified"
            )

    return problems


def _validate_items(attr: Attribute, name: str, items: list[Any]) -> list[str]:
    problems: list[str] = []
    if len(items) < attr.min_items:
        problems.append(f"{name}: expected at least {attr.min_items} item(s)")

    for index, item in enumerate(items):
        item_name = f"{name}.{index}"
        if isinstance(attr.elem, AttributeType):
            if not _matches_type(attr.elem, item):
                problems.append(
                    f"{item_name}: expected {attr.elem.value}, got {type(item).__name__}"
                )
        elif not isinstance(item, Mapping):
            problems.append(f"{item_name}: expected a block")
        else:
            problems.extend(_validate_block(attr.elem, item, prefix=f"{item_name}."))
    return problems


__all__ = [
    "Attribute",
    "AttributeType",
    "Resource",
    "ResourceData",
    "Schema",
    "string_in_slice",
]
