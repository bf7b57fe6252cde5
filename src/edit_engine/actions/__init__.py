"""Command-line verbs that drive an edit session."""

from .command import CommandResult, CommandUsageError, submit_command_line

__all__ = ["CommandResult", "CommandUsageError", "submit_command_line"]
