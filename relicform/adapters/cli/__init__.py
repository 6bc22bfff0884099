"""Command-line adapter.

Maps CLI commands (create, read, update, delete, import, validate) onto
resource handlers and formats their results as JSON.
"""

from .commands import ResourceCommandHandler, run_command

__all__ = ["ResourceCommandHandler", "run_command"]
