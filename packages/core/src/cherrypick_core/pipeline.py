"""End-to-end cherry-pick run: branch → replay → push → pull request."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from github import GithubException
from rich.console import Console

from cherrypick_core.compose import compose_review_request
from cherrypick_core.config import DEFAULT_AUTHOR_EMAIL, DEFAULT_AUTHOR_NAME
from cherrypick_core.errors import (
    CherryPickError,
    GitCommandError,
    HostingError,
    InputValidationError,
    ReplayConflictError,
    ReplayFailedError,
)
from cherrypick_core.gh.pull_request import attach_labels, create_review_request, get_repo
from cherrypick_core.git.repository import GitRepository
from cherrypick_core.naming import branch_name
from cherrypick_core.outputs.base import BaseOutputs
from cherrypick_core.outputs.github import build_outputs
from cherrypick_core.replay import ReplayConflict, ReplayFailure, replay
from cherrypick_core.reporter import OutcomeReporter, RunResult, print_header, print_summary
from cherrypick_core.utils.process import CommandResult

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class RunInputs:
    """Inputs for one run, checked by validate_inputs() before use."""

    commits: list[str]
    target_branch: str
    repository: str
    token: str
    new_branch: str | None = None
    title: str | None = None
    body: str | None = None
    author_name: str = DEFAULT_AUTHOR_NAME
    author_email: str = DEFAULT_AUTHOR_EMAIL
    draft: bool = False
    labels: list[str] = field(default_factory=list)


def validate_inputs(inputs: RunInputs) -> None:
    """Reject unusable inputs before anything touches the repository."""
    if not inputs.repository:
        raise InputValidationError("Repository not specified and GITHUB_REPOSITORY not set")
    owner, _, name = inputs.repository.partition("/")
    if not owner or not name or "/" in name:
        raise InputValidationError(f"Repository must be in owner/name format, got {inputs.repository!r}")
    if not inputs.commits or not any(inputs.commits):
        raise InputValidationError("No commits specified")
    if not inputs.target_branch:
        raise InputValidationError("Target branch not specified")
    if not inputs.token:
        raise InputValidationError("No GitHub token specified")


def _require(result: CommandResult, message: str) -> None:
    if not result.ok:
        raise GitCommandError(message, result)


def _prepare_branch(git: GitRepository, target_branch: str, new_branch: str) -> None:
    console.print(f"Fetching branch: {target_branch}", markup=False)
    _require(git.fetch(target_branch), f"Failed to fetch branch {target_branch}")

    console.print(f"Creating branch {new_branch} from {git.remote}/{target_branch}", markup=False)
    _require(git.checkout_remote(target_branch), f"Failed to checkout {git.remote}/{target_branch}")
    _require(git.create_and_checkout_branch(new_branch), f"Failed to create branch {new_branch}")


def run_cherry_pick(
    inputs: RunInputs,
    git: GitRepository | None = None,
    repo_obj=None,
    outputs: BaseOutputs | None = None,
) -> RunResult:
    """Run the whole flow and return the result contract.

    Raises a CherryPickError subclass on any non-success path. Whenever the
    replay has run, the error carries ``result`` with at least the branch
    name and replay status, which are also already published to ``outputs``.
    Push and pull request creation happen only after a successful replay.
    """
    validate_inputs(inputs)

    outputs = outputs if outputs is not None else build_outputs()
    outputs.mask(inputs.token)
    reporter = OutcomeReporter(outputs, requested_commits=inputs.commits)

    try:
        return _run(inputs, git or GitRepository(), repo_obj, reporter)
    except CherryPickError as e:
        e.result = reporter.result
        raise


def _run(inputs: RunInputs, git: GitRepository, repo_obj, reporter: OutcomeReporter) -> RunResult:
    print_header(inputs.repository, inputs.target_branch, inputs.commits, inputs.new_branch)

    new_branch = branch_name(inputs.new_branch, inputs.target_branch, inputs.commits)
    console.print(f"Using branch name: {new_branch}", markup=False)

    git.configure_identity(inputs.author_name, inputs.author_email)
    _prepare_branch(git, inputs.target_branch, new_branch)

    outcome = replay(inputs.commits, git)
    reporter.record_replay(new_branch, outcome)
    logger.debug("Replay outcome: %s", outcome)

    if isinstance(outcome, ReplayFailure):
        print_summary(inputs.target_branch, reporter.result)
        raise ReplayFailedError(outcome)

    if isinstance(outcome, ReplayConflict):
        print_summary(inputs.target_branch, reporter.result)
        console.print("[yellow]Cherry-pick had conflicts. Manual intervention required.[/yellow]")
        raise ReplayConflictError(outcome)

    console.print(f"Pushing branch: {new_branch}", markup=False)
    _require(git.push(new_branch), "Failed to push branch")

    text = compose_review_request(inputs.title, inputs.body, inputs.target_branch, outcome, git.commit_subject)

    if repo_obj is None:
        try:
            repo_obj = get_repo(inputs.repository, token=inputs.token)
        except GithubException as e:
            raise HostingError(f"Could not access repository {inputs.repository}: {e}") from e

    console.print("Creating pull request...")
    ref = create_review_request(
        repo_obj,
        title=text.title,
        body=text.body,
        head=new_branch,
        base=inputs.target_branch,
        draft=inputs.draft,
    )
    reporter.record_review_request(ref)

    if inputs.labels:
        console.print(f"Adding labels: {', '.join(inputs.labels)}", markup=False)
        attach_labels(repo_obj, ref.number, inputs.labels)

    print_summary(inputs.target_branch, reporter.result)
    console.print("[green]Cherry-pick and PR creation completed successfully![/green]")
    return reporter.result
