"""Tests for bounded subprocess capture."""

import os
import sys

from cherrypick_core.utils.process import TRUNCATION_MARKER, CommandResult, run_command


def _py(code):
    return [sys.executable, "-c", code]


def test_captures_stdout_and_exit_code():
    result = run_command(_py("print('hello')"))
    assert result == CommandResult(exit_code=0, stdout="hello", stderr="")
    assert result.ok


def test_captures_stderr_and_nonzero_exit():
    result = run_command(_py("import sys; sys.stderr.write('bad thing\\n'); sys.exit(3)"))
    assert result.exit_code == 3
    assert result.stderr == "bad thing"
    assert not result.ok


def test_output_is_stripped_by_default():
    result = run_command(_py("print('  padded  ')"))
    assert result.stdout == "padded"


def test_strip_can_be_disabled():
    result = run_command(_py("print(' M file.txt')"), strip=False)
    assert result.stdout == " M file.txt\n"


def test_output_truncated_at_limit():
    result = run_command(_py("print('x' * 5000)"), max_output_bytes=100)
    assert result.stdout == "x" * 100 + TRUNCATION_MARKER


def test_each_stream_capped_independently():
    code = "import sys; sys.stdout.write('o' * 50); sys.stderr.write('e' * 500)"
    result = run_command(_py(code), max_output_bytes=100)
    assert result.stdout == "o" * 50
    assert result.stderr.startswith("e" * 100)
    assert result.stderr.endswith("[output truncated]")


def test_large_output_does_not_block():
    # Far beyond the OS pipe buffer on both streams at once.
    code = "import sys; sys.stdout.write('a' * 2_000_000); sys.stderr.write('b' * 2_000_000)"
    result = run_command(_py(code), max_output_bytes=1024)
    assert result.ok
    assert len(result.stdout) < 2048
    assert len(result.stderr) < 2048


def test_missing_executable_reported_as_127():
    result = run_command(["definitely-not-a-real-binary-cherrypick"])
    assert result.exit_code == 127
    assert result.stderr


def test_env_passed_to_child():
    env = {**os.environ, "CHERRYPICK_TEST_VALUE": "on"}
    result = run_command(_py("import os; print(os.environ['CHERRYPICK_TEST_VALUE'])"), env=env)
    assert result.stdout == "on"
