"""Pull request title and body generation for a successful replay."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from cherrypick_core.replay import ReplayOutcome, ReplaySuccess

_FOOTER = "Generated by cherrypick-pr"


@dataclass(frozen=True)
class ReviewRequestText:
    title: str
    body: str


def _cached(lookup: Callable[[str], str]) -> Callable[[str], str]:
    # One git call per distinct commit, even when a commit is listed twice.
    cache: dict[str, str] = {}

    def wrapper(commit: str) -> str:
        if commit not in cache:
            cache[commit] = lookup(commit)
        return cache[commit]

    return wrapper


def build_title(target_branch: str, applied: tuple[str, ...], subject_of: Callable[[str], str]) -> str:
    if len(applied) == 1:
        return f"Cherry-pick: {subject_of(applied[0])}"
    return f"Cherry-pick {len(applied)} commits to {target_branch}"


def build_body(target_branch: str, applied: tuple[str, ...], subject_of: Callable[[str], str]) -> str:
    """Render the default PR description.

    One line per applied commit, in replay order. Duplicates are listed as
    many times as they were replayed.
    """
    lines = [
        "## Cherry-pick PR",
        "",
        f"**Target branch:** `{target_branch}`",
        "",
        "### Commits cherry-picked:",
    ]
    for commit in applied:
        lines.append(f"- `{commit[:7]}` {subject_of(commit)}")
    lines.extend(["", "---", _FOOTER])
    return "\n".join(lines)


def compose_review_request(
    title: str | None,
    body: str | None,
    target_branch: str,
    outcome: ReplayOutcome,
    subject_lookup: Callable[[str], str],
) -> ReviewRequestText:
    """Return the title and body for the pull request opened after ``outcome``.

    Caller-supplied title/body are used verbatim. Only a successful outcome
    can be composed; a conflict or failure never produces a pull request.
    """
    if not isinstance(outcome, ReplaySuccess):
        raise ValueError(f"Cannot compose a pull request for a {outcome.status.value} replay.")

    subject_of = _cached(subject_lookup)
    applied = outcome.applied_commits
    return ReviewRequestText(
        title=title or build_title(target_branch, applied, subject_of),
        body=body or build_body(target_branch, applied, subject_of),
    )
