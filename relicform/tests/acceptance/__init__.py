"""Live New Relic acceptance tests."""
