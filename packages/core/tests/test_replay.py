"""Tests for the commit replay engine."""

import pytest

from cherrypick_core.replay import (
    ReplayConflict,
    ReplayFailure,
    ReplayStatus,
    ReplaySuccess,
    finalize_message,
    has_conflict_markers,
    replay,
)

COMMITS = ["abc1234", "def5678", "ghi9012", "jkl3456"]


# ---------------------------------------------------------------------------
# success path
# ---------------------------------------------------------------------------


class TestReplaySuccess:
    @pytest.mark.parametrize("n", [1, 2, 4])
    def test_all_commits_applied_in_order(self, fake_git, n):
        git = fake_git()
        outcome = replay(COMMITS[:n], git)

        assert isinstance(outcome, ReplaySuccess)
        assert outcome.status is ReplayStatus.SUCCESS
        assert outcome.applied_commits == tuple(COMMITS[:n])
        assert [c[1] for c in git.calls if c[0] == "apply"] == COMMITS[:n]

    def test_finalize_uses_generated_message(self, fake_git):
        git = fake_git()
        replay(["abc1234"], git)
        assert ("finalize", "Cherry-pick: abc1234") in git.calls

    def test_duplicates_replayed_in_order(self, fake_git):
        git = fake_git()
        outcome = replay(["abc1234", "abc1234"], git)
        assert outcome.applied_commits == ("abc1234", "abc1234")
        assert git.count("apply") == 2

    def test_no_abort_or_status_on_clean_run(self, fake_git):
        git = fake_git()
        replay(COMMITS, git)
        assert git.count("abort") == 0
        assert git.count("status") == 0

    def test_nothing_to_commit_counts_as_applied(self, fake_git):
        git = fake_git(nothing_to_commit={"def5678"})
        outcome = replay(COMMITS[:3], git)

        assert isinstance(outcome, ReplaySuccess)
        assert outcome.applied_commits == tuple(COMMITS[:3])
        assert ("apply", "ghi9012") in git.calls


# ---------------------------------------------------------------------------
# conflicts
# ---------------------------------------------------------------------------


class TestReplayConflict:
    @pytest.mark.parametrize("k", [1, 2, 4])
    def test_kth_commit_conflicts(self, fake_git, k):
        conflicting = COMMITS[k - 1]
        git = fake_git(conflicts={conflicting})
        outcome = replay(COMMITS, git)

        assert isinstance(outcome, ReplayConflict)
        assert outcome.status is ReplayStatus.CONFLICT
        assert outcome.applied_commits == tuple(COMMITS[: k - 1])
        assert outcome.stopped_at_commit == conflicting
        assert git.count("abort") == 1

    def test_diagnostic_names_commit(self, fake_git):
        outcome = replay(["abc1234"], fake_git(conflicts={"abc1234"}))
        assert outcome.diagnostic == "Merge conflict while cherry-picking commit abc1234"

    def test_stops_after_conflict(self, fake_git):
        git = fake_git(conflicts={"def5678"})
        replay(COMMITS, git)
        applied = [c[1] for c in git.calls if c[0] == "apply"]
        assert applied == ["abc1234", "def5678"]

    def test_conflicting_commit_not_finalized(self, fake_git):
        git = fake_git(conflicts={"abc1234"})
        replay(["abc1234"], git)
        assert git.count("finalize") == 0

    def test_abort_failure_is_not_escalated(self, fake_git, caplog):
        git = fake_git(conflicts={"abc1234"}, abort_ok=False)
        outcome = replay(["abc1234", "def5678"], git)

        assert isinstance(outcome, ReplayConflict)
        assert git.count("abort") == 1
        assert "Could not abort" in caplog.text


# ---------------------------------------------------------------------------
# generic failures
# ---------------------------------------------------------------------------


class TestReplayFailure:
    def test_apply_failure_without_markers(self, fake_git):
        git = fake_git(apply_failures={"def5678": "fatal: bad revision 'def5678'"})
        outcome = replay(COMMITS, git)

        assert isinstance(outcome, ReplayFailure)
        assert outcome.status is ReplayStatus.FAILED
        assert outcome.applied_commits == ("abc1234",)
        assert outcome.stopped_at_commit == "def5678"
        assert outcome.diagnostic == "fatal: bad revision 'def5678'"
        assert git.count("abort") == 0

    def test_apply_failure_falls_back_to_stdout(self, fake_git):
        class StdoutOnlyGit(fake_git):
            def apply_commit_no_finalize(self, commit):
                from cherrypick_core.utils.process import CommandResult

                return CommandResult(exit_code=1, stdout="something went wrong")

        outcome = replay(["abc1234"], StdoutOnlyGit())
        assert outcome.diagnostic == "something went wrong"

    def test_finalize_failure_not_appended(self, fake_git):
        git = fake_git(finalize_failures={"def5678": "error: gpg failed to sign the data"})
        outcome = replay(COMMITS, git)

        assert isinstance(outcome, ReplayFailure)
        assert outcome.applied_commits == ("abc1234",)
        assert outcome.stopped_at_commit == "def5678"
        assert outcome.diagnostic == "Failed to commit cherry-pick: error: gpg failed to sign the data"
        assert git.count("apply") == 2


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


class TestConflictMarkers:
    @pytest.mark.parametrize("code", ["UU", "AA", "DD", "AU", "UA", "DU", "UD"])
    def test_unmerged_codes_detected(self, code):
        assert has_conflict_markers({("a.txt", code)})

    @pytest.mark.parametrize("code", ["M ", " M", "A ", "??", "R "])
    def test_ordinary_codes_ignored(self, code):
        assert not has_conflict_markers({("a.txt", code)})

    def test_path_containing_marker_text_ignored(self):
        # Only the status column matters, not the path.
        assert not has_conflict_markers({("docs/UU-AA-DD.md", "M ")})

    def test_empty_tree(self):
        assert not has_conflict_markers(set())


def test_finalize_message_references_commit():
    assert finalize_message("abc1234") == "Cherry-pick: abc1234"


def test_outcomes_are_immutable():
    outcome = ReplaySuccess(applied_commits=("abc1234",))
    with pytest.raises(AttributeError):
        outcome.applied_commits = ()
