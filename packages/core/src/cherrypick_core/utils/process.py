"""Subprocess execution with bounded output capture.

git can produce arbitrarily large output (a cherry-pick of a generated file,
a status listing on a huge tree). Both pipes are drained concurrently so the
child never blocks on a full pipe, but only the first ``max_output_bytes`` of
each stream are kept. Anything beyond that is read and discarded, and a
visible marker is appended so readers know the text is incomplete.
"""

from __future__ import annotations

import logging
import subprocess
import threading
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_MAX_OUTPUT_BYTES = 10 * 1024 * 1024
TRUNCATION_MARKER = "\n... [output truncated]"

_CHUNK_SIZE = 64 * 1024

# Conventional shell status for "command not found".
_EXIT_NOT_FOUND = 127


@dataclass(frozen=True)
class CommandResult:
    """Exit status plus captured stdout/stderr of one command."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class _BoundedReader(threading.Thread):
    def __init__(self, stream, limit: int):
        super().__init__(daemon=True)
        self._stream = stream
        self._limit = limit
        self.data = bytearray()
        self.truncated = False

    def run(self) -> None:
        try:
            for chunk in iter(lambda: self._stream.read(_CHUNK_SIZE), b""):
                if self.truncated:
                    # Keep draining so the child can exit.
                    continue
                self.data.extend(chunk)
                if len(self.data) > self._limit:
                    del self.data[self._limit :]
                    self.truncated = True
        finally:
            self._stream.close()

    def text(self, strip: bool) -> str:
        out = self.data.decode("utf-8", errors="replace")
        if self.truncated:
            out += TRUNCATION_MARKER
        return out.strip() if strip else out


def run_command(
    args: list[str],
    cwd: str | None = None,
    max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES,
    strip: bool = True,
    env: dict[str, str] | None = None,
) -> CommandResult:
    """Run ``args`` to completion and return its exit code and captured output.

    Never raises for a non-zero exit: callers inspect ``CommandResult.ok``.
    An executable that cannot be started is reported as exit code 127 with
    the OS error as stderr. Pass ``strip=False`` when leading whitespace is
    significant (porcelain status lines). ``env`` replaces the child's
    environment when given.
    """
    logger.debug("Running: %s", " ".join(args))
    try:
        proc = subprocess.Popen(
            args,
            cwd=cwd,
            env=env,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as e:
        logger.debug("Could not start %s: %s", args[0], e)
        return CommandResult(exit_code=_EXIT_NOT_FOUND, stderr=str(e))

    out_reader = _BoundedReader(proc.stdout, max_output_bytes)
    err_reader = _BoundedReader(proc.stderr, max_output_bytes)
    out_reader.start()
    err_reader.start()
    exit_code = proc.wait()
    out_reader.join()
    err_reader.join()

    result = CommandResult(exit_code=exit_code, stdout=out_reader.text(strip), stderr=err_reader.text(strip))
    if not result.ok:
        logger.debug("%s exited with %d: %s", args[0], exit_code, result.stderr or result.stdout)
    return result
