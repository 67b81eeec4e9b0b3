"""GitHub token resolution with gh CLI fallback.

Resolution order (stops at first success):
  1. --token on the command line (or its GITHUB_TOKEN envvar binding)
  2. GH_TOKEN environment variable, as understood by the GitHub CLI
  3. `gh auth token` (GitHub CLI session, available after `gh auth login`)

In GitHub Actions the workflow passes secrets.GITHUB_TOKEN, so step 1 wins.
Locally, anyone logged in with gh needs no extra setup.
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)


def resolve_github_token(explicit: str | None = None) -> str | None:
    """Return a GitHub token or None if no source provides one.

    Never raises; callers should check for None and emit a UsageError.
    """
    if explicit:
        return explicit

    token = os.environ.get("GH_TOKEN")
    if token:
        return token

    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0:
            gh_token = result.stdout.strip()
            if gh_token:
                logger.debug("Resolved GitHub token via gh CLI session.")
                return gh_token
    except (FileNotFoundError, subprocess.TimeoutExpired):
        # gh is not installed or timed out.
        logger.debug("gh CLI unavailable for token resolution.")

    return None
