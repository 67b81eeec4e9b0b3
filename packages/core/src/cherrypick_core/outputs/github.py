"""GitHub Actions sink: step outputs and log masking.

Outputs are appended to the file named by ``$GITHUB_OUTPUT`` using the
``name=value`` form, or the ``name<<DELIMITER`` heredoc form when the value
spans several lines. Masking uses the ``::add-mask::`` workflow command so
the token never appears in job logs, even if some later command echoes it.
"""

from __future__ import annotations

import os
import uuid

from cherrypick_core.outputs.base import BaseOutputs


class GithubActionsOutputs(BaseOutputs):
    def __init__(self, output_path: str):
        super().__init__()
        self._output_path = output_path

    def _write(self, name: str, value: str) -> None:
        with open(self._output_path, "a", encoding="utf-8") as f:
            if "\n" in value:
                delimiter = f"ghadelimiter_{uuid.uuid4()}"
                f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                f.write(f"{name}={value}\n")

    def mask(self, secret: str) -> None:
        if secret:
            print(f"::add-mask::{secret}")


def build_outputs() -> BaseOutputs:
    """Pick the sink for the current environment.

    ``GITHUB_OUTPUT`` set → GithubActionsOutputs, otherwise NoOpOutputs.
    """
    from cherrypick_core.outputs.noop import NoOpOutputs

    output_path = os.environ.get("GITHUB_OUTPUT")
    if output_path:
        return GithubActionsOutputs(output_path)
    return NoOpOutputs()
