"""CLI command implementations for relicform.

Drives the resource lifecycle (create, read, update, delete, import,
validate) from the command line. Each command returns a JSON-ready
dictionary; API and configuration failures are reported as
`{"status": "error", ...}` instead of raised.
"""

import logging
from collections.abc import Mapping
from typing import Any

from relicform.core.errors import ConfigValidationError, NewRelicError
from relicform.core.provider import ProviderConfig
from relicform.core.schema import Resource, ResourceData

logger = logging.getLogger(__name__)


class ResourceCommandHandler:
    """Handles CLI commands by delegating to resource handlers."""

    def __init__(self, resources: Mapping[str, Resource], meta: ProviderConfig):
        """Initialize the CLI command handler.

        Args:
            resources: Resource type name to Resource definition.
            meta: Provider configuration handed to every handler.
        """
        self.resources = resources
        self.meta = meta

    def _resource(self, resource_type: str) -> Resource:
        try:
            return self.resources[resource_type]
        except KeyError:
            raise ValueError(f"Unknown resource type: {resource_type}") from None

    @staticmethod
    def _success(
        operation: str, resource_type: str, d: ResourceData | None
    ) -> dict[str, Any]:
        result: dict[str, Any] = {
            "status": "success",
            "operation": operation,
            "resource_type": resource_type,
        }
        if d is None:
            result["id"] = None
            result["message"] = "Resource no longer exists"
        else:
            result["id"] = d.id
            result["attributes"] = d.to_dict()
        return result

    @staticmethod
    def _error(operation: str, resource_type: str, error: Exception) -> dict[str, Any]:
        logger.error(f"Failed to {operation} {resource_type}: {error}")
        result: dict[str, Any] = {
            "status": "error",
            "operation": operation,
            "resource_type": resource_type,
            "message": str(error),
        }
        if isinstance(error, ConfigValidationError):
            result["problems"] = list(error.problems)
        return result

    async def create_resource(
        self, resource_type: str, config: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Create a resource from its configuration."""
        try:
            d = await self._resource(resource_type).create(self.meta, config)
            logger.info(f"Created {resource_type} {d.id}")
            return self._success("create", resource_type, d)
        except (NewRelicError, ValueError) as e:
            return self._error("create", resource_type, e)

    async def read_resource(
        self,
        resource_type: str,
        resource_id: str,
        state: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Refresh a resource's state from New Relic."""
        try:
            d = await self._resource(resource_type).read(self.meta, resource_id, state)
            return self._success("read", resource_type, d)
        except (NewRelicError, ValueError) as e:
            return self._error("read", resource_type, e)

    async def update_resource(
        self,
        resource_type: str,
        resource_id: str,
        config: Mapping[str, Any],
        prior_state: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Update a resource in place."""
        try:
            d = await self._resource(resource_type).update(
                self.meta, resource_id, config, prior_state
            )
            logger.info(f"Updated {resource_type} {d.id}")
            return self._success("update", resource_type, d)
        except (NewRelicError, ValueError) as e:
            return self._error("update", resource_type, e)

    async def delete_resource(
        self,
        resource_type: str,
        resource_id: str,
        state: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Delete a resource."""
        try:
            await self._resource(resource_type).delete(self.meta, resource_id, state)
            logger.info(f"Deleted {resource_type} {resource_id}")
            return {
                "status": "success",
                "operation": "delete",
                "resource_type": resource_type,
                "id": resource_id,
            }
        except (NewRelicError, ValueError) as e:
            return self._error("delete", resource_type, e)

    async def import_resource(
        self, resource_type: str, resource_id: str
    ) -> dict[str, Any]:
        """Import an existing object by ID."""
        try:
            d = await self._resource(resource_type).import_state(self.meta, resource_id)
            return self._success("import", resource_type, d)
        except (NewRelicError, ValueError) as e:
            return self._error("import", resource_type, e)

    def validate_config(
        self, resource_type: str, config: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Validate a configuration without calling the API."""
        try:
            self._resource(resource_type).validate(config)
            return {
                "status": "success",
                "operation": "validate",
                "resource_type": resource_type,
            }
        except (NewRelicError, ValueError) as e:
            return self._error("validate", resource_type, e)

    def list_resources(self) -> dict[str, Any]:
        """List resource types and their attributes."""
        return {
            "status": "success",
            "operation": "resources",
            "resources": {
                name: {
                    key: {
                        "type": attr.type.value,
                        "required": attr.required,
                        "computed": attr.computed,
                        "description": attr.description,
                    }
                    for key, attr in resource.schema.items()
                }
                for name, resource in sorted(self.resources.items())
            },
        }


def _require(args: Mapping[str, Any], *names: str) -> None:
    missing = [name for name in names if name not in args]
    if missing:
        raise ValueError(f"Missing required parameter: {', '.join(missing)}")


async def run_command(
    handler: ResourceCommandHandler,
    command: str,
    args: Mapping[str, Any],
) -> dict[str, Any]:
    """Run a CLI command.

    Entry point for executing CLI commands. Maps command names to handler methods.

    Args:
        handler: ResourceCommandHandler bound to a provider configuration.
        command: Command name ('create', 'read', 'update', 'delete',
            'import', 'validate', 'resources').
        args: Dictionary of command arguments.

    Returns:
        Dictionary with command result.

    Raises:
        ValueError: If the command is not recognized or arguments are missing.
    """
    if command == "resources":
        return handler.list_resources()

    _require(args, "type")
    resource_type = args["type"]

    if command == "create":
        _require(args, "config")
        return await handler.create_resource(resource_type, args["config"])

    elif command == "read":
        _require(args, "id")
        return await handler.read_resource(resource_type, args["id"], args.get("state"))

    elif command == "update":
        _require(args, "id", "config")
        return await handler.update_resource(
            resource_type, args["id"], args["config"], args.get("state")
        )

    elif command == "delete":
        _require(args, "id")
        return await handler.delete_resource(resource_type, args["id"], args.get("state"))

    elif command == "import":
        _require(args, "id")
        return await handler.import_resource(resource_type, args["id"])

    elif command == "validate":
        _require(args, "config")
        return handler.validate_config(resource_type, args["config"])

    else:
        raise ValueError(f"Unknown command: {command}")
