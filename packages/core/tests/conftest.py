"""Shared fixtures for cherrypick_core tests."""

from __future__ import annotations

import pytest

from cherrypick_core.utils.process import CommandResult

OK = CommandResult(exit_code=0)


class FakeGit:
    """In-memory stand-in for GitRepository that records every call.

    Behaviour per commit is configured up front:
      conflicts          — apply fails and the tree shows an unmerged path
      apply_failures     — apply fails with the given stderr, tree stays clean
      nothing_to_commit  — apply succeeds but finalize reports nothing to commit
      finalize_failures  — apply succeeds, finalize fails with the given stderr
    """

    remote = "origin"

    def __init__(
        self,
        conflicts=(),
        apply_failures=None,
        nothing_to_commit=(),
        finalize_failures=None,
        subjects=None,
        abort_ok=True,
        fetch_ok=True,
        checkout_ok=True,
        branch_ok=True,
        push_ok=True,
    ):
        self.conflicts = set(conflicts)
        self.apply_failures = apply_failures or {}
        self.nothing_to_commit = set(nothing_to_commit)
        self.finalize_failures = finalize_failures or {}
        self.subjects = subjects or {}
        self.abort_ok = abort_ok
        self.fetch_ok = fetch_ok
        self.checkout_ok = checkout_ok
        self.branch_ok = branch_ok
        self.push_ok = push_ok
        self.calls: list[tuple] = []
        self._current: str | None = None
        self._conflicted = False

    def count(self, name: str) -> int:
        return sum(1 for c in self.calls if c[0] == name)

    @staticmethod
    def _result(ok: bool, stderr: str) -> CommandResult:
        return OK if ok else CommandResult(exit_code=1, stderr=stderr)

    def configure_identity(self, name, email):
        self.calls.append(("configure_identity", name, email))

    def fetch(self, branch):
        self.calls.append(("fetch", branch))
        return self._result(self.fetch_ok, f"fatal: couldn't find remote ref {branch}")

    def checkout_remote(self, branch):
        self.calls.append(("checkout_remote", branch))
        return self._result(self.checkout_ok, f"error: pathspec 'origin/{branch}' did not match")

    def create_and_checkout_branch(self, name):
        self.calls.append(("create_branch", name))
        return self._result(self.branch_ok, f"fatal: a branch named '{name}' already exists")

    def apply_commit_no_finalize(self, commit):
        self.calls.append(("apply", commit))
        self._current = commit
        if commit in self.conflicts:
            self._conflicted = True
            return CommandResult(exit_code=1, stderr=f"error: could not apply {commit}...")
        if commit in self.apply_failures:
            return CommandResult(exit_code=128, stderr=self.apply_failures[commit])
        return OK

    def working_tree_status(self):
        self.calls.append(("status",))
        if self._conflicted:
            return {("src/app.py", "UU"), ("README.md", "M ")}
        return set()

    def finalize_apply(self, message):
        self.calls.append(("finalize", message))
        if self._current in self.nothing_to_commit:
            return CommandResult(exit_code=1, stdout="On branch work\nnothing to commit, working tree clean")
        if self._current in self.finalize_failures:
            return CommandResult(exit_code=1, stderr=self.finalize_failures[self._current])
        return OK

    def abort_in_progress_apply(self):
        self.calls.append(("abort",))
        self._conflicted = False
        return self._result(self.abort_ok, "error: no cherry-pick or revert in progress")

    def push(self, branch):
        self.calls.append(("push", branch))
        return self._result(self.push_ok, "remote: Permission denied")

    def commit_subject(self, commit):
        self.calls.append(("subject", commit))
        return self.subjects.get(commit, f"Subject of {commit}")


@pytest.fixture
def fake_git():
    """Factory for FakeGit instances: fake_git(conflicts={"def5678"}, ...)."""
    return FakeGit
