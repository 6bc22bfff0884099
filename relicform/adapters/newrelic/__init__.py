"""New Relic API client adapters.

- NerdGraph (GraphQL): synthetic monitor mutations and entity lookups
- REST API v2: alert policies and synthetics alert conditions
"""
