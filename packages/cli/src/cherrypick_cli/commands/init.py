"""init command — write team defaults and a GitHub Actions workflow.

The workflow is a manually dispatched job: a maintainer fills in the commit
list and the target branch in the Actions UI and gets a pull request back,
with no local checkout needed.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

import click
import yaml
from rich.console import Console

from cherrypick_core.config import DEFAULT_AUTHOR_EMAIL, DEFAULT_AUTHOR_NAME, split_csv

console = Console()

_WORKFLOW_TEMPLATE = """\
name: Cherry-pick

on:
  workflow_dispatch:
    inputs:
      commits:
        description: Comma-separated commit SHAs, in the order to apply them
        required: true
      target-branch:
        description: Branch to open the pull request against
        required: true

jobs:
  cherry-pick:
    runs-on: ubuntu-latest
    permissions:
      contents: write
      pull-requests: write

    steps:
      - uses: actions/checkout@v4
        with:
          fetch-depth: 0

      - name: Set up Python
        uses: actions/setup-python@v5
        with:
          python-version: "3.12"

      - name: Install cherrypick-pr
        run: pip install "cherrypick-pr=={version}"

      - name: Cherry-pick and open PR
        env:
          GITHUB_TOKEN: ${{{{ secrets.GITHUB_TOKEN }}}}
        run: |
          cherrypick run \\
            --commits "${{{{ inputs.commits }}}}" \\
            --target-branch "${{{{ inputs.target-branch }}}}"
"""


@click.command("init")
@click.option("--repo", default=None, help="GitHub repository (owner/name). Auto-detected from git remote.")
def init_cmd(repo: str | None):
    """Set up cherrypick for this repository.

    Creates .cherrypick.yml with commit identity, draft and label defaults,
    and optionally generates a workflow_dispatch GitHub Actions workflow.
    """
    console.print("\n[bold cyan]cherrypick init[/bold cyan] — repository setup\n")

    if repo is None:
        repo = _detect_repo_from_git()
        if repo:
            console.print(f"[dim]Detected repository: {repo}[/dim]")
        else:
            repo = click.prompt("GitHub repository (owner/name)")

    author_name = click.prompt("Commit author name", default=DEFAULT_AUTHOR_NAME)
    author_email = click.prompt("Commit author email", default=DEFAULT_AUTHOR_EMAIL)
    draft = click.confirm("Open pull requests as drafts?", default=False)
    labels = split_csv(click.prompt("Labels to add (comma-separated, blank for none)", default="", show_default=False))

    config: dict = {"repository": repo, "draft": draft}
    # Only persist values that differ from the built-in defaults.
    if author_name != DEFAULT_AUTHOR_NAME:
        config["author_name"] = author_name
    if author_email != DEFAULT_AUTHOR_EMAIL:
        config["author_email"] = author_email
    if labels:
        config["labels"] = labels

    _write_config(config)
    console.print("[green]Created .cherrypick.yml[/green]")

    setup_ci = click.confirm("\nGenerate .github/workflows/cherrypick.yml for GitHub Actions?", default=True)
    if setup_ci:
        _write_workflow()
        console.print("[green]Created .github/workflows/cherrypick.yml[/green]")

    console.print("\n[bold green]Setup complete![/bold green]")
    console.print(
        "Cherry-pick with: [bold]cherrypick run --commits <sha>[,<sha>...] --target-branch <branch>[/bold]"
    )


def _detect_repo_from_git() -> str | None:
    """Try to detect the GitHub repo slug from the git remote URL."""
    try:
        result = subprocess.run(
            ["git", "remote", "get-url", "origin"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode != 0:
            return None
        url = result.stdout.strip()
        # https://github.com/owner/repo.git  →  owner/repo
        # git@github.com:owner/repo.git      →  owner/repo
        if "github.com" not in url:
            return None
        slug = url.split("github.com")[-1].lstrip("/:").removesuffix(".git")
        return slug if "/" in slug else None
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None


def _write_config(config: dict) -> None:
    """Write or update .cherrypick.yml, preserving any existing keys."""
    path = Path(".cherrypick.yml")
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))


def _get_version() -> str:
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("cherrypick-pr")
    except PackageNotFoundError:
        return "0.1.0"


def _write_workflow() -> None:
    workflow_dir = Path(".github/workflows")
    workflow_dir.mkdir(parents=True, exist_ok=True)
    (workflow_dir / "cherrypick.yml").write_text(_WORKFLOW_TEMPLATE.format(version=_get_version()))
