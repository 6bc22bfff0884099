"""Core handler tests."""
