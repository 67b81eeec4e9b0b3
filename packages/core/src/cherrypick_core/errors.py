"""Exception hierarchy for cherrypick runs.

Every error raised by cherrypick_core derives from CherryPickError so the CLI
can catch the whole family in one place and decide on the exit code:

  InputValidationError  — bad or missing input, raised before any git mutation
  ReplayConflictError   — a commit conflicted; the branch is left for manual work
  ReplayFailedError     — a commit could not be applied for a non-conflict reason
  GitCommandError       — fetch / checkout / branch / push failed
  HostingError          — the GitHub API rejected the pull request or labels
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cherrypick_core.utils.process import CommandResult
    from cherrypick_core.replay import ReplayConflict, ReplayFailure
    from cherrypick_core.reporter import RunResult


class CherryPickError(Exception):
    """Base class for all cherrypick errors.

    ``result`` is attached by run_cherry_pick before the error leaves the
    pipeline, so callers can still report the branch name and replay status.
    """

    result: RunResult | None = None


class InputValidationError(CherryPickError):
    """Raised when the run inputs are unusable. Nothing has been created yet."""


class ReplayConflictError(CherryPickError):
    def __init__(self, outcome: ReplayConflict):
        super().__init__(outcome.diagnostic)
        self.outcome = outcome


class ReplayFailedError(CherryPickError):
    def __init__(self, outcome: ReplayFailure):
        super().__init__(f"Cherry-pick failed: {outcome.diagnostic}")
        self.outcome = outcome


class GitCommandError(CherryPickError):
    """A repository operation outside the replay itself returned non-zero."""

    def __init__(self, message: str, command_result: CommandResult | None = None):
        detail = f": {command_result.stderr}" if command_result is not None and command_result.stderr else ""
        super().__init__(f"{message}{detail}")
        self.command_result = command_result


class HostingError(CherryPickError):
    """Wraps a GithubException raised while creating the pull request or labelling it."""
