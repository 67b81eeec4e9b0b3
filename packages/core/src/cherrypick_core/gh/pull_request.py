from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from github import Github, GithubException

from cherrypick_core.errors import HostingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PullRequestRef:
    url: str
    number: int


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def create_review_request(repo, title: str, body: str, head: str, base: str, draft: bool = False) -> PullRequestRef:
    """Open a pull request from ``head`` into ``base`` and return its URL and number."""
    try:
        pr = repo.create_pull(title=title, body=body, head=head, base=base, draft=draft)
    except GithubException as e:
        raise HostingError(f"Failed to create pull request {head} -> {base}: {e}") from e
    logger.info("Pull request created: %s", pr.html_url)
    return PullRequestRef(url=pr.html_url, number=pr.number)


def attach_labels(repo, number: int, labels: Sequence[str]) -> None:
    """Add all ``labels`` to PR ``number`` in a single API call, preserving order."""
    try:
        repo.get_issue(number).add_to_labels(*labels)
    except GithubException as e:
        raise HostingError(f"Failed to add labels to #{number}: {e}") from e
