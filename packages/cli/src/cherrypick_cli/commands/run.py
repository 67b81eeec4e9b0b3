"""run command — cherry-pick commits and open a pull request."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from cherrypick_core.config import split_csv
from cherrypick_core.errors import CherryPickError, InputValidationError, ReplayConflictError
from cherrypick_core.git.repository import GitRepository
from cherrypick_core.pipeline import RunInputs, run_cherry_pick

console = Console()


@click.command("run")
@click.option("--commits", required=True, help="Comma-separated commit SHAs, applied in the given order.")
@click.option("--target-branch", required=True, help="Branch the pull request targets, e.g. release/1.0.")
@click.option("--new-branch", default=None, help="Name of the branch to create. Auto-generated when omitted.")
@click.option("--title", default=None, help="Pull request title. Generated from the commits when omitted.")
@click.option("--body", default=None, help="Pull request body. Generated from the commits when omitted.")
@click.option(
    "--token",
    envvar="GITHUB_TOKEN",
    default=None,
    help="GitHub token with contents and pull-requests write access.",
)
@click.option("--repo", default=None, help="GitHub repository in owner/name format. Defaults to $GITHUB_REPOSITORY.")
@click.option("--author-name", default=None, help="Committer name for the cherry-picked commits.")
@click.option("--author-email", default=None, help="Committer email for the cherry-picked commits.")
@click.option("--draft/--no-draft", default=None, help="Open the pull request as a draft.")
@click.option("--labels", default=None, help="Comma-separated labels to add to the pull request.")
@click.option(
    "--workdir",
    default=None,
    type=click.Path(exists=True, file_okay=False),
    help="Git working tree to operate in. Defaults to the current directory.",
)
@click.pass_context
def run_cmd(
    ctx,
    commits: str,
    target_branch: str,
    new_branch: str | None,
    title: str | None,
    body: str | None,
    token: str | None,
    repo: str | None,
    author_name: str | None,
    author_email: str | None,
    draft: bool | None,
    labels: str | None,
    workdir: str | None,
):
    """Replay commits onto a new branch cut from TARGET_BRANCH and open a PR.

    Commits are applied one at a time in the order given. The run stops at
    the first commit that conflicts or fails; in that case nothing is pushed
    and no pull request is opened, and the partially built branch is left in
    the working tree for manual resolution.

    \b
    Exit status:
      0  pull request opened
      1  conflict, cherry-pick failure, or git/GitHub error
      2  invalid input
    """
    from cherrypick_core.config import load_config
    from cherrypick_cli.auth import resolve_github_token

    config_path = (ctx.obj or {}).get("config_path") or str(Path(workdir or ".") / ".cherrypick.yml")
    try:
        config = load_config(
            config_path,
            cli_overrides={
                "repository": repo,
                "author_name": author_name,
                "author_email": author_email,
                "draft": draft,
                "labels": labels,
            },
        )
    except InputValidationError as e:
        raise click.UsageError(str(e))

    token = resolve_github_token(token or config.get("github_token"))
    if not token:
        raise click.UsageError(
            "No GitHub token found. Pass --token, set GITHUB_TOKEN, or run `gh auth login` first."
        )

    inputs = RunInputs(
        commits=split_csv(commits),
        target_branch=target_branch.strip(),
        repository=config["repository"],
        token=token,
        new_branch=new_branch or None,
        title=title or None,
        body=body or None,
        author_name=config["author_name"],
        author_email=config["author_email"],
        draft=config["draft"],
        labels=config["labels"],
    )
    git = GitRepository(cwd=workdir, remote=config["remote"], max_output_bytes=config["max_output_bytes"])

    try:
        result = run_cherry_pick(inputs, git=git)
    except InputValidationError as e:
        raise click.UsageError(str(e))
    except ReplayConflictError as e:
        console.print(f"[yellow]Branch left for manual resolution: {e.result.branch_name}[/yellow]")
        raise click.ClickException(str(e))
    except CherryPickError as e:
        raise click.ClickException(str(e))

    console.print(f"[green]Pull request #{result.pr_number}: {result.pr_url}[/green]")
