"""Interactive shell: command dispatcher and prompt loop."""

from __future__ import annotations

from .app import ShellApp
from .dispatcher import HELP_TEXT, CommandDispatcher, CommandResult

__all__ = ["ShellApp", "CommandDispatcher", "CommandResult", "HELP_TEXT"]
