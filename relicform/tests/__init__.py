"""Test suite for relicform.

Organized into four categories:

1. core/: Unit tests for schemas, mappings and resource handlers
   - Uses in-memory fakes for ports

2. adapters/: Tests for the NerdGraph and REST adapters
   - Drives httpx.MockTransport instead of the live API

3. acceptance/: Lifecycle tests against the live New Relic API
   - Skipped unless NEW_RELIC_API_KEY and NEW_RELIC_ACCOUNT_ID are set

4. fakes/: Port implementations for testing
"""
