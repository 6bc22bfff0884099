"""API adapter tests."""
