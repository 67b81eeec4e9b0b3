from __future__ import annotations

import time
from typing import Callable, Sequence

BRANCH_PREFIX = "cherrypick"
_SHORT_SHA_LENGTH = 7


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


def branch_name(
    explicit_name: str | None,
    target_branch: str,
    commits: Sequence[str],
    now_ms: Callable[[], int] = _epoch_millis,
) -> str:
    """Return the working branch name for a run.

    An explicit name is used verbatim; collisions are the caller's problem.
    Otherwise the name is ``cherrypick/<target>/<sha7>-<millis>``, with slashes
    in the target replaced by dashes. The timestamp keeps concurrent runs for
    the same target and commit apart without any coordination.
    """
    if explicit_name:
        return explicit_name
    sanitized_target = target_branch.replace("/", "-")
    short_sha = commits[0][:_SHORT_SHA_LENGTH]
    return f"{BRANCH_PREFIX}/{sanitized_target}/{short_sha}-{now_ms()}"
