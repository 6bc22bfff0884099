"""relicform: declarative resource handlers for the New Relic API."""

__version__ = "0.1.0"
