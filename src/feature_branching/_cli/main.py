"""Main CLI entry point for feature-branching."""

import sys
import traceback

import click

from ..config import (
    DEFAULT_API_URL,
    DEFAULT_TRUNK_BRANCH,
    DEFAULT_WORKSPACE,
    Config,
    parse_labels,
)
from ..errors import ConfigurationError, FeatureBranchingError
from ..integrator import GitRepository, IntegrationPipeline, PullRequestClient
from ..utils.logging import log_error, log_info, log_success, log_warning
from .utils import get_version


def version_callback(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Show version and exit.

    Args:
        ctx: Click context
        param: Click parameter (unused)
        value: Whether --version flag was provided

    """
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"feature-branching {get_version()}")
    ctx.exit()


@click.command(
    help="Rebuild a pre-release branch from trunk and labeled pull requests",
)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit",
)
@click.option(
    "--github-token",
    envvar="INPUT_GITHUB_TOKEN",
    default="",
    help="GitHub access token [env: INPUT_GITHUB_TOKEN]",
)
@click.option(
    "--owner", envvar="INPUT_OWNER", default="", help="Repository owner [env: INPUT_OWNER]"
)
@click.option(
    "--repo", envvar="INPUT_REPO", default="", help="Repository name [env: INPUT_REPO]"
)
@click.option(
    "--trunk-branch",
    envvar="INPUT_TRUNK_BRANCH",
    default=DEFAULT_TRUNK_BRANCH,
    show_default=True,
    help="Protected base branch [env: INPUT_TRUNK_BRANCH]",
)
@click.option(
    "--target-branch",
    envvar="INPUT_TARGET_BRANCH",
    default="",
    help="Branch to rebuild (default: pre-<trunk>) [env: INPUT_TARGET_BRANCH]",
)
@click.option(
    "--labels",
    envvar="INPUT_LABELS",
    default="",
    help="Comma-separated required labels; empty matches all [env: INPUT_LABELS]",
)
@click.option(
    "--github-output",
    envvar="GITHUB_OUTPUT",
    default="",
    help="Step output file [env: GITHUB_OUTPUT]",
)
@click.option(
    "--api-url",
    envvar="GITHUB_API_URL",
    default=DEFAULT_API_URL,
    show_default=True,
    help="GitHub REST API base URL [env: GITHUB_API_URL]",
)
@click.option(
    "--repo-path",
    default=".",
    type=click.Path(exists=True, file_okay=False, dir_okay=True),
    help="Working copy to operate on (default: current directory)",
)
@click.option(
    "--workspace",
    default=DEFAULT_WORKSPACE,
    show_default=True,
    help="Directory registered as git safe.directory",
)
@click.option(
    "--no-git-setup",
    is_flag=True,
    help="Skip global git identity and safe.directory configuration",
)
def cli(
    github_token: str,
    owner: str,
    repo: str,
    trunk_branch: str,
    target_branch: str,
    labels: str,
    github_output: str,
    api_url: str,
    repo_path: str,
    workspace: str,
    no_git_setup: bool,
) -> None:
    r"""Integrate labeled pull requests into a rolling pre-release branch.

    The target branch is recreated from trunk on every run, each qualifying
    pull request is squash-committed onto it oldest first, and the result is
    force-pushed. Pull requests that fail to integrate are skipped.

    Examples:
      \b
      feature-branching \\
        --github-token "$GITHUB_TOKEN" \\
        --owner octo-org --repo app \\
        --trunk-branch main --labels next-feature \\
        --github-output "$GITHUB_OUTPUT"

    """
    try:
        config = Config(
            github_token=github_token,
            owner=owner,
            repo=repo,
            github_output=github_output,
            trunk_branch=trunk_branch or DEFAULT_TRUNK_BRANCH,
            target_branch=target_branch,
            required_labels=parse_labels(labels),
            api_url=api_url or DEFAULT_API_URL,
        )

        pipeline = IntegrationPipeline(
            config=config,
            client=PullRequestClient(config),
            repository=GitRepository(repo_path),
            configure_git=not no_git_setup,
            workspace=workspace,
        )
        result = pipeline.run()

        outcome = result.outcome
        for failure in outcome.failures:
            log_warning(f"Skipped PR #{failure.number} ({failure.stage} failed)")
        if outcome.successes:
            integrated = ", ".join(f"#{n}" for n in outcome.integrated_numbers)
            log_success(f"Integrated {integrated} into '{result.target_branch}'")
        else:
            log_info(f"No pull requests integrated into '{result.target_branch}'")

    except ConfigurationError as e:
        log_error(f"invalid configuration: {e}")
        sys.exit(1)
    except FeatureBranchingError as e:
        log_error(str(e))
        sys.exit(1)
    except Exception as e:
        log_error(f"Unexpected error: {e}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    cli()
