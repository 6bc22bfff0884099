"""Unit tests for attribute schemas and the lifecycle runner."""

import pytest

from relicform.core.errors import ConfigValidationError, NewRelicError
from relicform.core.schema import (
    Attribute,
    AttributeType,
    Resource,
    ResourceData,
    string_in_slice,
)


# ============================================================================
# Test Fixtures
# ============================================================================


SCHEMA = {
    "name": Attribute(type=AttributeType.STRING, required=True),
    "count": Attribute(type=AttributeType.INT, optional=True),
    "enabled": Attribute(type=AttributeType.BOOL, optional=True, default=True),
    "color": Attribute(
        type=AttributeType.STRING,
        optional=True,
        validators=(string_in_slice(["RED", "BLUE"]),),
    ),
    "owner_id": Attribute(type=AttributeType.INT, required=True, force_new=True),
    "remote_id": Attribute(type=AttributeType.STRING, computed=True),
    "zones_a": Attribute(
        type=AttributeType.SET,
        elem=AttributeType.STRING,
        optional=True,
        min_items=1,
        at_least_one_of=("zones_a", "zones_b"),
    ),
    "zones_b": Attribute(
        type=AttributeType.SET,
        elem=AttributeType.STRING,
        optional=True,
        min_items=1,
        at_least_one_of=("zones_a", "zones_b"),
    ),
    "label": Attribute(
        type=AttributeType.SET,
        optional=True,
        elem={
            "key": Attribute(type=AttributeType.STRING, required=True),
            "values": Attribute(
                type=AttributeType.LIST, elem=AttributeType.STRING, required=True
            ),
        },
    ),
}


class Recorder:
    """Collects handler invocations."""

    def __init__(self):
        self.calls: list[tuple[str, ResourceData]] = []
        self.gone = False

    async def create(self, d: ResourceData, meta: object) -> None:
        self.calls.append(("create", d))
        d.set_id("new-id")
        d.set("remote_id", "remote-1")

    async def read(self, d: ResourceData, meta: object) -> None:
        self.calls.append(("read", d))
        if self.gone:
            d.set_id("")
            return
        d.set("name", "from-remote")

    async def update(self, d: ResourceData, meta: object) -> None:
        self.calls.append(("update", d))

    async def delete(self, d: ResourceData, meta: object) -> None:
        self.calls.append(("delete", d))


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def resource(recorder: Recorder) -> Resource:
    return Resource(
        schema=SCHEMA,
        create=recorder.create,
        read=recorder.read,
        update=recorder.update,
        delete=recorder.delete,
    )


def valid_config(**overrides: object) -> dict:
    config = {"name": "web", "owner_id": 7, "zones_a": ["us-1"]}
    config.update(overrides)
    return config


# ============================================================================
# Attribute declarations
# ============================================================================


class TestAttribute:
    """Tests for Attribute declaration checks."""

    def test_required_and_optional_are_exclusive(self) -> None:
        with pytest.raises(ValueError, match="required"):
            Attribute(type=AttributeType.STRING, required=True, optional=True)

    def test_mode_must_be_declared(self) -> None:
        with pytest.raises(ValueError):
            Attribute(type=AttributeType.STRING)

    def test_collections_need_element_type(self) -> None:
        with pytest.raises(ValueError, match="element type"):
            Attribute(type=AttributeType.SET, optional=True)

    def test_computed_only(self) -> None:
        assert Attribute(type=AttributeType.INT, computed=True).computed_only
        assert not Attribute(type=AttributeType.INT, computed=True, optional=True).computed_only


# ============================================================================
# ResourceData
# ============================================================================


class TestResourceData:
    """Tests for ResourceData accessors."""

    def test_get_ok_treats_zero_values_as_unset(self) -> None:
        d = ResourceData(SCHEMA, {"name": "", "count": 0, "zones_a": []})

        assert d.get_ok("name") == ("", False)
        assert d.get_ok("count") == (0, False)
        assert d.get_ok("zones_a") == ([], False)
        assert d.get_ok("color") == (None, False)

    def test_get_returns_default_when_unset(self) -> None:
        d = ResourceData(SCHEMA)
        assert d.get("enabled") is True

    def test_string_sets_are_sorted_and_deduplicated(self) -> None:
        d = ResourceData(SCHEMA)
        d.set("zones_a", ("us-2", "us-1", "us-2"))
        assert d.get("zones_a") == ["us-1", "us-2"]

    def test_unknown_attribute_is_rejected(self) -> None:
        d = ResourceData(SCHEMA)
        with pytest.raises(KeyError, match="bogus"):
            d.set("bogus", 1)
        with pytest.raises(KeyError):
            d.get("bogus")

    def test_to_dict_includes_defaults(self) -> None:
        d = ResourceData(SCHEMA, {"name": "web"})
        assert d.to_dict() == {"name": "web", "enabled": True}

    def test_set_id(self) -> None:
        d = ResourceData(SCHEMA, resource_id="abc")
        assert d.id == "abc"
        d.set_id("")
        assert d.id == ""


# ============================================================================
# Validation
# ============================================================================


class TestValidation:
    """Tests for Resource.validate."""

    def test_valid_config_passes(self, resource: Resource) -> None:
        resource.validate(valid_config(label=[{"key": "team", "values": ["sre"]}]))

    def test_missing_required_attribute(self, resource: Resource) -> None:
        config = valid_config()
        del config["name"]

        with pytest.raises(ConfigValidationError) as exc_info:
            resource.validate(config)

        assert "name: required attribute is not set" in exc_info.value.problems

    def test_unknown_attribute(self, resource: Resource) -> None:
        with pytest.raises(ConfigValidationError, match="bogus: unsupported attribute"):
            resource.validate(valid_config(bogus=True))

    def test_computed_attribute_cannot_be_set(self, resource: Resource) -> None:
        with pytest.raises(ConfigValidationError, match="remote_id: attribute is computed"):
            resource.validate(valid_config(remote_id="x"))

    def test_wrong_type(self, resource: Resource) -> None:
        with pytest.raises(ConfigValidationError, match="count: expected int, got str"):
            resource.validate(valid_config(count="3"))

    def test_bool_is_not_an_int(self, resource: Resource) -> None:
        with pytest.raises(ConfigValidationError, match="count: expected int"):
            resource.validate(valid_config(count=True))

    def test_validator_failure(self, resource: Resource) -> None:
        with pytest.raises(ConfigValidationError, match="color: expected one of"):
            resource.validate(valid_config(color="GREEN"))

    def test_min_items(self, resource: Resource) -> None:
        with pytest.raises(ConfigValidationError, match="zones_a: expected at least 1"):
            resource.validate(valid_config(zones_a=[], zones_b=["eu-1"]))

    def test_at_least_one_of_is_reported_once(self, resource: Resource) -> None:
        config = valid_config()
        del config["zones_a"]

        with pytest.raises(ConfigValidationError) as exc_info:
            resource.validate(config)

        matching = [p for p in exc_info.value.problems if "must be specified" in p]
        assert len(matching) == 1

    def test_nested_block_validation(self, resource: Resource) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            resource.validate(valid_config(label=[{"values": ["sre"]}, "oops"]))

        problems = exc_info.value.problems
        assert "label.0.key: required attribute is not set" in problems
        assert "label.1: expected a block" in problems

    def test_all_problems_are_collected(self, resource: Resource) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            resource.validate({"count": "x", "color": "GREEN"})

        assert len(exc_info.value.problems) >= 4

    def test_customize_diff_runs_after_schema_checks(self, recorder: Recorder) -> None:
        resource = Resource(
            schema=SCHEMA,
            create=recorder.create,
            read=recorder.read,
            update=recorder.update,
            delete=recorder.delete,
            customize_diff=lambda d: ["count must be even"] if (d.get("count") or 0) % 2 else [],
        )

        resource.validate(valid_config(count=2))
        with pytest.raises(ConfigValidationError, match="count must be even"):
            resource.validate(valid_config(count=3))


class TestStringInSlice:
    def test_case_sensitive_by_default(self) -> None:
        validate = string_in_slice(["A"])
        assert validate("A", "k") == []
        assert validate("a", "k")

    def test_ignore_case(self) -> None:
        validate = string_in_slice(["A"], ignore_case=True)
        assert validate("a", "k") == []


# ============================================================================
# Lifecycle
# ============================================================================


@pytest.mark.asyncio
class TestLifecycle:
    """Tests for the Resource lifecycle runner."""

    async def test_create_runs_handler_and_returns_state(
        self, resource: Resource, recorder: Recorder
    ) -> None:
        d = await resource.create(None, valid_config())

        assert d.id == "new-id"
        assert d.get("remote_id") == "remote-1"
        assert recorder.calls[0][0] == "create"

    async def test_create_rejects_invalid_config_before_handler(
        self, resource: Resource, recorder: Recorder
    ) -> None:
        with pytest.raises(ConfigValidationError):
            await resource.create(None, {"name": "web"})
        assert recorder.calls == []

    async def test_create_requires_handler_to_set_id(self, recorder: Recorder) -> None:
        async def create_without_id(d: ResourceData, meta: object) -> None:
            return None

        resource = Resource(
            schema=SCHEMA,
            create=create_without_id,
            read=recorder.read,
            update=recorder.update,
            delete=recorder.delete,
        )

        with pytest.raises(NewRelicError, match="without setting an ID"):
            await resource.create(None, valid_config())

    async def test_read_returns_refreshed_data(self, resource: Resource) -> None:
        d = await resource.read(None, "abc", {"name": "stale"})

        assert d is not None
        assert d.id == "abc"
        assert d.get("name") == "from-remote"

    async def test_read_returns_none_when_gone(
        self, resource: Resource, recorder: Recorder
    ) -> None:
        recorder.gone = True
        assert await resource.read(None, "abc") is None

    async def test_update_carries_computed_values(
        self, resource: Resource, recorder: Recorder
    ) -> None:
        prior = {**valid_config(), "remote_id": "remote-1"}

        d = await resource.update(None, "abc", valid_config(name="renamed"), prior)

        assert d.get("remote_id") == "remote-1"
        assert d.get("name") == "renamed"
        assert recorder.calls[-1][0] == "update"

    async def test_update_rejects_force_new_change(
        self, resource: Resource, recorder: Recorder
    ) -> None:
        with pytest.raises(ConfigValidationError, match="owner_id: cannot be changed in place"):
            await resource.update(None, "abc", valid_config(owner_id=8), valid_config())
        assert recorder.calls == []

    async def test_delete(self, resource: Resource, recorder: Recorder) -> None:
        await resource.delete(None, "abc")

        operation, d = recorder.calls[-1]
        assert operation == "delete"
        assert d.id == "abc"

    async def test_import_reads_by_id(self, resource: Resource, recorder: Recorder) -> None:
        d = await resource.import_state(None, "abc")

        assert d is not None
        assert d.id == "abc"
        assert recorder.calls[-1][0] == "read"

    async def test_import_not_supported(self, recorder: Recorder) -> None:
        resource = Resource(
            schema=SCHEMA,
            create=recorder.create,
            read=recorder.read,
            update=recorder.update,
            delete=recorder.delete,
            importable=False,
        )

        with pytest.raises(NewRelicError, match="does not support import"):
            await resource.import_state(None, "abc")
