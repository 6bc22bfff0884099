"""Composition root for relicform.

This module is the ONLY location that imports both core handler logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Usage:
    relicform <command> '<json arguments>'

Example:
    relicform read '{"type": "newrelic_alert_policy", "id": "123"}'
"""

import asyncio
import json
import logging
import sys
from typing import Any

from relicform.adapters.cli.commands import ResourceCommandHandler, run_command
from relicform.adapters.newrelic.alerts import RestAlertsAdapter
from relicform.adapters.newrelic.entities import NerdGraphEntitiesAdapter
from relicform.adapters.newrelic.nerdgraph import NerdGraphClient
from relicform.adapters.newrelic.synthetics import NerdGraphSyntheticsAdapter
from relicform.config import Settings, load_settings
from relicform.core.provider import ProviderConfig
from relicform.core.resources import resource_mapping

COMMANDS = ("create", "read", "update", "delete", "import", "validate", "resources")


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Logs go to stderr so stdout carries only command results.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


class Clients:
    """API clients built from settings, closed together on shutdown."""

    def __init__(self, settings: Settings):
        self.nerdgraph = NerdGraphClient(
            api_url=settings.resolved_nerdgraph_url,
            api_key=settings.new_relic_api_key,
            timeout=settings.request_timeout_seconds,
        )
        self.alerts = RestAlertsAdapter(
            api_url=settings.resolved_rest_api_url,
            api_key=settings.new_relic_api_key,
            timeout=settings.request_timeout_seconds,
        )
        self.provider_config = ProviderConfig(
            synthetics=NerdGraphSyntheticsAdapter(self.nerdgraph),
            entities=NerdGraphEntitiesAdapter(self.nerdgraph),
            alerts=self.alerts,
            account_id=settings.new_relic_account_id,
        )

    async def close(self) -> None:
        await self.nerdgraph.close()
        await self.alerts.close()


def parse_arguments(argv: list[str]) -> tuple[str, dict[str, Any]]:
    """Split the command line into a command name and its JSON arguments.

    Raises:
        ValueError: If the command is unknown or the arguments are not a JSON object.
    """
    if not argv:
        raise ValueError(f"Missing command. Available commands: {', '.join(COMMANDS)}")

    command = argv[0].lower()
    if command not in COMMANDS:
        raise ValueError(f"Unknown command: {command}. Available commands: {', '.join(COMMANDS)}")

    args_str = " ".join(argv[1:]).strip()
    if not args_str:
        return command, {}

    try:
        args = json.loads(args_str)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON arguments: {e}") from e
    if not isinstance(args, dict):
        raise ValueError("Arguments must be a JSON object")
    return command, args


async def bootstrap(argv: list[str]) -> int:
    """Load configuration, wire adapters and run one command.

    Steps:
    1. Parse the command line
    2. Load configuration from environment
    3. Configure logging
    4. Instantiate API clients and the provider configuration
    5. Run the command and print its result

    Returns:
        Process exit code: 0 if the command succeeded, 1 otherwise.
    """
    # Step 1: Parse command line
    command, args = parse_arguments(argv)

    # Step 2: Load configuration
    settings = load_settings()

    # Step 3: Configure logging
    configure_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)

    # Step 4: Instantiate adapters
    clients = Clients(settings)
    logger.debug(
        f"NerdGraph endpoint: {settings.resolved_nerdgraph_url}, "
        f"REST endpoint: {settings.resolved_rest_api_url}"
    )

    handler = ResourceCommandHandler(resource_mapping(), clients.provider_config)

    # Step 5: Run command
    try:
        result = await run_command(handler, command, args)
    finally:
        await clients.close()

    print(json.dumps(result, indent=2, default=str))
    return 0 if result.get("status") == "success" else 1


def main() -> None:
    """Application entry point.

    Exit codes:
        0: Command succeeded
        1: Command failed or fatal error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        exit_code = asyncio.run(bootstrap(sys.argv[1:]))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (SIGINT)")
        sys.exit(130)
    except ValueError as e:
        print(json.dumps({"status": "error", "message": str(e)}, indent=2))
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        print(json.dumps({"status": "error", "message": str(e)}, indent=2))
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
