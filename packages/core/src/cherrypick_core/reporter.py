"""Projection of run state onto the caller-visible result contract.

Branch name and replay status are published the moment the replay finishes,
before push or pull request creation, so they stay observable when a later
step fails. The reporter holds no business logic beyond that projection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from rich.console import Console

from cherrypick_core.gh.pull_request import PullRequestRef
from cherrypick_core.outputs.base import BaseOutputs
from cherrypick_core.replay import ReplayOutcome, ReplaySuccess

console = Console()

_STATUS_STYLE = {"success": "green", "conflict": "yellow", "failed": "red"}


@dataclass
class RunResult:
    """Everything a caller can observe about a run. Fields fill in as the run progresses."""

    branch_name: str | None = None
    status: str | None = None
    requested_commits: list[str] = field(default_factory=list)
    applied_commits: list[str] = field(default_factory=list)
    failed_commit: str | None = None
    pr_url: str | None = None
    pr_number: int | None = None


class OutcomeReporter:
    def __init__(self, outputs: BaseOutputs, requested_commits: Sequence[str] = ()):
        self.outputs = outputs
        self.result = RunResult(requested_commits=list(requested_commits))

    def record_replay(self, branch_name: str, outcome: ReplayOutcome) -> None:
        self.result.branch_name = branch_name
        self.result.status = outcome.status.value
        self.result.applied_commits = list(outcome.applied_commits)
        if not isinstance(outcome, ReplaySuccess):
            self.result.failed_commit = outcome.stopped_at_commit
        self.outputs.set_output("cherry-pick-status", outcome.status.value)
        self.outputs.set_output("branch-name", branch_name)

    def record_review_request(self, ref: PullRequestRef) -> None:
        self.result.pr_url = ref.url
        self.result.pr_number = ref.number
        self.outputs.set_output("pr-url", ref.url)
        self.outputs.set_output("pr-number", str(ref.number))


def print_header(repository: str, target_branch: str, commits: Sequence[str], new_branch: str | None) -> None:
    console.rule(style="dim")
    console.print(f"Repository    : {repository}", markup=False)
    console.print(f"Target Branch : {target_branch}", markup=False)
    console.print(f"Commits       : {', '.join(commits)}", markup=False)
    console.print(f"New Branch    : {new_branch or '(auto-generated)'}", markup=False)
    console.rule(style="dim")
    console.print()


def print_summary(target_branch: str, result: RunResult) -> None:
    style = _STATUS_STYLE.get(result.status or "", "white")
    console.print()
    console.rule(style="dim")
    console.print("[bold]Cherry-pick Summary[/bold]")
    console.rule(style="dim")
    console.print(f"Target Branch    : {target_branch}", markup=False)
    console.print(f"New Branch       : {result.branch_name}", markup=False)
    console.print(f"Commits Requested: {len(result.requested_commits)}", markup=False)
    console.print(f"Commits Applied  : {len(result.applied_commits)}", markup=False)
    console.print(f"Status           : [{style}]{result.status}[/{style}]")
    if result.failed_commit:
        console.print(f"Failed Commit    : {result.failed_commit}", markup=False)
    if result.pr_url:
        console.print(f"PR URL           : {result.pr_url}", markup=False)
        console.print(f"PR Number        : #{result.pr_number}", markup=False)
    console.rule(style="dim")
