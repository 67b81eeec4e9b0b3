"""In-memory sink, used for local runs where there is no output file."""

from __future__ import annotations

from cherrypick_core.outputs.base import BaseOutputs


class NoOpOutputs(BaseOutputs):
    def _write(self, name: str, value: str) -> None:
        pass  # values are already recorded by set_output
