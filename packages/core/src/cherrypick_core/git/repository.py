"""Thin adapter over the git CLI.

Every method maps to exactly one git invocation and returns its CommandResult
without interpreting it. Deciding what a non-zero exit means is the caller's
job: the replay engine treats a failed cherry-pick very differently from a
failed push.
"""

from __future__ import annotations

import logging
import os

from cherrypick_core.utils.process import DEFAULT_MAX_OUTPUT_BYTES, CommandResult, run_command

logger = logging.getLogger(__name__)

# Two-letter porcelain codes git uses for unmerged paths (see git-status(1),
# "Short Format"). UU / AA / DD are the both-modified / both-added /
# both-deleted cases; the remaining four are one-sided add/delete conflicts.
UNMERGED_STATUS_CODES = frozenset({"UU", "AA", "DD", "AU", "UA", "DU", "UD"})

# The engine matches git's English messages ("nothing to commit"), so git
# always runs untranslated.
_GIT_LOCALE = {"LC_ALL": "C", "LANGUAGE": "C"}


def parse_porcelain_status(output: str) -> set[tuple[str, str]]:
    """Parse ``git status --porcelain`` (v1) output into (path, code) pairs.

    Renames (``R  old -> new``) are reported under the new path.
    """
    entries: set[tuple[str, str]] = set()
    for line in output.splitlines():
        if len(line) < 4:
            continue
        code, path = line[:2], line[3:]
        if " -> " in path:
            path = path.split(" -> ", 1)[1]
        entries.add((path.strip('"'), code))
    return entries


class GitRepository:
    """Runs git commands in a single working tree.

    The tree is assumed to be exclusively owned by the current run; nothing
    here guards against concurrent use.
    """

    def __init__(
        self,
        cwd: str | None = None,
        remote: str = "origin",
        max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES,
    ):
        self.cwd = cwd
        self.remote = remote
        self.max_output_bytes = max_output_bytes

    def _git(self, *args: str, strip: bool = True) -> CommandResult:
        return run_command(
            ["git", *args],
            cwd=self.cwd,
            max_output_bytes=self.max_output_bytes,
            strip=strip,
            env={**os.environ, **_GIT_LOCALE},
        )

    def configure_identity(self, name: str, email: str) -> None:
        logger.info("Configuring git identity: %s <%s>", name, email)
        self._git("config", "user.name", name)
        self._git("config", "user.email", email)

    def fetch(self, branch: str) -> CommandResult:
        return self._git("fetch", self.remote, branch)

    def checkout_remote(self, branch: str) -> CommandResult:
        return self._git("checkout", f"{self.remote}/{branch}")

    def create_and_checkout_branch(self, name: str) -> CommandResult:
        return self._git("checkout", "-b", name)

    def apply_commit_no_finalize(self, commit: str) -> CommandResult:
        return self._git("cherry-pick", commit, "--no-commit")

    def finalize_apply(self, message: str) -> CommandResult:
        return self._git("commit", "-m", message)

    def abort_in_progress_apply(self) -> CommandResult:
        """Return the tree to its pre-apply state after a conflicted cherry-pick.

        ``--no-commit`` picks record no CHERRY_PICK_HEAD, so ``cherry-pick
        --abort`` can refuse with "no cherry-pick in progress". ``reset
        --merge`` then discards the conflicted index and working tree changes.
        """
        result = self._git("cherry-pick", "--abort")
        if result.ok:
            return result
        logger.debug("cherry-pick --abort failed (%s); falling back to reset --merge", result.stderr)
        return self._git("reset", "--merge")

    def working_tree_status(self) -> set[tuple[str, str]]:
        result = self._git("status", "--porcelain", strip=False)
        return parse_porcelain_status(result.stdout)

    def push(self, branch: str) -> CommandResult:
        return self._git("push", self.remote, branch)

    def commit_subject(self, commit: str) -> str:
        return self._git("log", "-1", "--format=%s", commit).stdout
