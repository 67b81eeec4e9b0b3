"""Commit replay engine.

Applies an ordered list of commits onto the currently checked-out branch,
one at a time, and stops at the first commit that does not apply cleanly.

Termination on first failure is the safety property: a branch holding an
unannounced subset of the requested commits is worse than a clean stop.
Conflicts and other failures are reported as distinct outcomes because only
the former is a normal, human-actionable result; the latter usually means a
bad commit reference or a tooling problem.

The outcome is a tagged variant: ReplaySuccess, ReplayConflict or
ReplayFailure. Only the non-success variants carry ``stopped_at_commit`` and
``diagnostic``, so the "both present iff not success" rule is enforced by
the class shape rather than by optional fields.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Protocol, Sequence, Union

from cherrypick_core.git.repository import UNMERGED_STATUS_CODES
from cherrypick_core.utils.process import CommandResult

logger = logging.getLogger(__name__)

_NOTHING_TO_COMMIT = "nothing to commit"


class ReplayStatus(str, enum.Enum):
    SUCCESS = "success"
    CONFLICT = "conflict"
    FAILED = "failed"


@dataclass(frozen=True)
class ReplaySuccess:
    applied_commits: tuple[str, ...]

    @property
    def status(self) -> ReplayStatus:
        return ReplayStatus.SUCCESS


@dataclass(frozen=True)
class ReplayConflict:
    applied_commits: tuple[str, ...]
    stopped_at_commit: str
    diagnostic: str

    @property
    def status(self) -> ReplayStatus:
        return ReplayStatus.CONFLICT


@dataclass(frozen=True)
class ReplayFailure:
    applied_commits: tuple[str, ...]
    stopped_at_commit: str
    diagnostic: str

    @property
    def status(self) -> ReplayStatus:
        return ReplayStatus.FAILED


ReplayOutcome = Union[ReplaySuccess, ReplayConflict, ReplayFailure]


class ReplayAdapter(Protocol):
    """The subset of GitRepository the engine drives."""

    def apply_commit_no_finalize(self, commit: str) -> CommandResult: ...

    def finalize_apply(self, message: str) -> CommandResult: ...

    def abort_in_progress_apply(self) -> CommandResult: ...

    def working_tree_status(self) -> set[tuple[str, str]]: ...


def finalize_message(commit: str) -> str:
    return f"Cherry-pick: {commit}"


def conflict_message(commit: str) -> str:
    return f"Merge conflict while cherry-picking commit {commit}"


def has_conflict_markers(entries: set[tuple[str, str]]) -> bool:
    """Return True if any path in a working-tree status listing is unmerged.

    This reads git's porcelain status codes, which is a heuristic: it covers
    every unmerged state git reports today but is not a formal conflict API.
    """
    return any(code in UNMERGED_STATUS_CODES for _, code in entries)


def _abort(adapter: ReplayAdapter, commit: str) -> None:
    result = adapter.abort_in_progress_apply()
    if not result.ok:
        logger.warning(
            "Could not abort in-progress cherry-pick of %s: %s",
            commit,
            result.stderr or result.stdout,
        )


def replay(commits: Sequence[str], adapter: ReplayAdapter) -> ReplayOutcome:
    """Apply ``commits`` in order through ``adapter`` and return the outcome.

    The caller must have checked out a fresh branch based on the target tip;
    this function never creates, switches or pushes branches.
    """
    applied: list[str] = []

    for commit in commits:
        logger.info("Cherry-picking commit: %s", commit)
        result = adapter.apply_commit_no_finalize(commit)

        if not result.ok:
            if has_conflict_markers(adapter.working_tree_status()):
                logger.warning("Conflict detected while cherry-picking %s", commit)
                _abort(adapter, commit)
                return ReplayConflict(
                    applied_commits=tuple(applied),
                    stopped_at_commit=commit,
                    diagnostic=conflict_message(commit),
                )
            return ReplayFailure(
                applied_commits=tuple(applied),
                stopped_at_commit=commit,
                diagnostic=result.stderr or result.stdout,
            )

        finalized = adapter.finalize_apply(finalize_message(commit))
        if not finalized.ok:
            if _NOTHING_TO_COMMIT in finalized.stdout:
                # The change is already present on the target; treat it as applied.
                logger.info("Commit %s produced no changes on this branch.", commit)
            else:
                return ReplayFailure(
                    applied_commits=tuple(applied),
                    stopped_at_commit=commit,
                    diagnostic=f"Failed to commit cherry-pick: {finalized.stderr}",
                )

        applied.append(commit)
        logger.info("Successfully cherry-picked: %s", commit)

    return ReplaySuccess(applied_commits=tuple(applied))
