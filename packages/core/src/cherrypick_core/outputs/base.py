"""Abstract result-contract sink.

A run publishes four values (branch-name, cherry-pick-status, pr-url,
pr-number). Where they end up depends on the environment: the GitHub
Actions output file in CI, nowhere but memory on a developer machine. The
reporter depends on BaseOutputs, not on a concrete sink.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseOutputs(ABC):
    """Pluggable destination for run outputs.

    Every value written is also kept in ``values`` so callers can read back
    what was published, whichever sink is in use.
    """

    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def set_output(self, name: str, value: str) -> None:
        self.values[name] = value
        self._write(name, value)

    @abstractmethod
    def _write(self, name: str, value: str) -> None:
        """Publish one output value."""

    def mask(self, secret: str) -> None:
        """Ask the log collector to redact ``secret``.

        Optional: the default does nothing, which is correct wherever
        stdout is not collected into shared logs.
        """
