import logging

import click

from project_pull_mover.cli.output import user_output
from project_pull_mover.core.config import (
    DEFAULT_PROJECT_ITEMS_LIMIT,
    DEFAULT_PULLS_PER_QUERY,
    build_config,
)
from project_pull_mover.core.context import MoverContext, create_context
from project_pull_mover.core.errors import ConfigError, PullMoverError
from project_pull_mover.core.mover import PullRequestMover
from project_pull_mover.core.user_feedback import create_feedback

# -h belongs to --gh-path
CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(None, "-v", "--version", package_name="project-pull-mover")
@click.option(
    "-p",
    "--project-number",
    type=int,
    help="Project number (required), e.g., 123 for https://github.com/orgs/someorg/projects/123",
)
@click.option(
    "-o",
    "--project-owner",
    help="Project owner login (required), e.g., someorg for "
    "https://github.com/orgs/someorg/projects/123",
)
@click.option(
    "-t",
    "--project-owner-type",
    help="Project owner type (required), either 'user' or 'organization'",
)
@click.option(
    "-s",
    "--status-field",
    help="Status field name (required), name of a single-select field in the project",
)
@click.option("-i", "--in-progress", help="Option ID of 'In progress' column for status field")
@click.option(
    "-a", "--not-against-main", help="Option ID of 'Not against main' column for status field"
)
@click.option("-n", "--needs-review", help="Option ID of 'Needs review' column for status field")
@click.option(
    "-r", "--ready-to-deploy", help="Option ID of 'Ready to deploy' column for status field"
)
@click.option("-c", "--conflicting", help="Option ID of 'Conflicting' column for status field")
@click.option(
    "-g",
    "--ignored",
    multiple=True,
    help="Comma-separated option IDs of columns like 'Blocked' or 'On hold'; may be repeated",
)
@click.option("-q", "--quiet", is_flag=True, help="Suppress all output except errors")
@click.option("--verbose", is_flag=True, help="Log gh commands and other debug details")
@click.option("-h", "--gh-path", help="Path to gh executable")
@click.option(
    "-f",
    "--failing-test-label",
    help="Label to apply to a pull request that has failing required builds",
)
@click.option(
    "-u", "--author", help="Only change pull requests in the project authored by this user"
)
@click.option(
    "-m",
    "--mark-draft",
    is_flag=True,
    help="Also mark pull requests as a draft when setting them to In progress, "
    "Not against main, or Conflicting status",
)
@click.option(
    "-b",
    "--builds-to-rerun",
    multiple=True,
    help="Case-insensitive comma-separated build names or partial build names to re-run "
    "when failing and the pull request moves back to In progress",
)
@click.option(
    "--project-items-limit",
    type=int,
    default=DEFAULT_PROJECT_ITEMS_LIMIT,
    show_default=True,
    help="Maximum number of project items to load",
)
@click.option(
    "--pulls-per-query",
    type=int,
    default=DEFAULT_PULLS_PER_QUERY,
    show_default=True,
    help="Pull requests to look up per GraphQL request",
)
@click.option(
    "--jobs",
    type=int,
    default=1,
    show_default=True,
    help="Pull requests to process in parallel",
)
@click.option("--dry-run", is_flag=True, help="Look everything up but change nothing")
@click.pass_context
def cli(
    ctx: click.Context,
    project_number: int | None,
    project_owner: str | None,
    project_owner_type: str | None,
    status_field: str | None,
    in_progress: str | None,
    not_against_main: str | None,
    needs_review: str | None,
    ready_to_deploy: str | None,
    conflicting: str | None,
    ignored: tuple[str, ...],
    quiet: bool,
    verbose: bool,
    gh_path: str | None,
    failing_test_label: str | None,
    author: str | None,
    mark_draft: bool,
    builds_to_rerun: tuple[str, ...],
    project_items_limit: int,
    pulls_per_query: int,
    jobs: int,
    dry_run: bool,
) -> None:
    """Move pull requests in a GitHub project to the status column they belong in."""
    _configure_logging(verbose)

    try:
        config = build_config(
            project_number=project_number,
            project_owner=project_owner,
            project_owner_type=project_owner_type,
            status_field=status_field,
            in_progress_option_id=in_progress,
            not_against_main_option_id=not_against_main,
            needs_review_option_id=needs_review,
            ready_to_deploy_option_id=ready_to_deploy,
            conflicting_option_id=conflicting,
            ignored_option_ids=ignored,
            quiet=quiet,
            verbose=verbose,
            dry_run=dry_run,
            gh_path=gh_path,
            failing_test_label=failing_test_label,
            author=author,
            allow_marking_drafts=mark_draft,
            builds_to_rerun=builds_to_rerun,
            project_items_limit=project_items_limit,
            pulls_per_query=pulls_per_query,
            jobs=jobs,
        )
    except ConfigError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        user_output(ctx.get_help())
        raise SystemExit(1) from e

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(config)
    mover_ctx: MoverContext = ctx.obj

    feedback = create_feedback(config.quiet)
    try:
        if not config.quiet:
            feedback.info(mover_ctx.github.get_auth_status())
        if config.dry_run:
            feedback.info("Dry run: no changes will be made")
        PullRequestMover(mover_ctx.github, mover_ctx.notifier, config, feedback).run()
    except (PullMoverError, RuntimeError) as e:
        feedback.error(str(e))
        raise SystemExit(1) from e


def main() -> None:
    """CLI entry point used by the `project-pull-mover` console script."""
    cli(auto_envvar_prefix="PROJECT_PULL_MOVER")
