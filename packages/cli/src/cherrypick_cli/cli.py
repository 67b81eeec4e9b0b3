"""CLI entry point for cherrypick.

Commands:
  run   — cherry-pick commits onto a new branch and open a pull request
  init  — write .cherrypick.yml and an optional GitHub Actions workflow
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.logging import RichHandler

from cherrypick_cli.commands.init import init_cmd
from cherrypick_cli.commands.run import run_cmd


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False, markup=False)],
    )
    # PyGithub and urllib3 are chatty at DEBUG; keep them at WARNING.
    for name in ("github", "urllib3"):
        logging.getLogger(name).setLevel(logging.WARNING)


@click.group()
@click.version_option(
    version=importlib.metadata.version("cherrypick-pr"),
    prog_name="cherrypick",
)
@click.option(
    "--config",
    "config_path",
    default=None,
    help="Path to the configuration file. Defaults to .cherrypick.yml in the working tree.",
    envvar="CHERRYPICK_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool):
    """Cherry-pick commits onto a branch and open a pull request."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(run_cmd)
main.add_command(init_cmd)
