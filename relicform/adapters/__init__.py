"""External adapters for relicform.

This package contains all external dependencies (httpx, the New Relic
APIs, the command line) and provides implementations of the core port
interfaces.

Adapter Organization:

- newrelic/: NerdGraph and REST v2 clients (synthetics, entities, alerts)
- cli/: Command-line interface driving the resource lifecycle
"""
