"""Run configuration built from command-line flags and environment."""

import shutil
from collections.abc import Iterable
from dataclasses import dataclass

from project_pull_mover.core.errors import ConfigError

VALID_OWNER_TYPES: tuple[str, ...] = ("user", "organization")
DEFAULT_PROJECT_ITEMS_LIMIT = 500
DEFAULT_PULLS_PER_QUERY = 7


def default_gh_path() -> str:
    """Locate gh on PATH, falling back to the bare command name."""
    return shutil.which("gh") or "gh"


def split_list_values(values: Iterable[str]) -> tuple[str, ...]:
    """Flatten repeated and comma-separated option values, dropping blanks.

    Example:
        >>> split_list_values(("a,b", " c "))
        ('a', 'b', 'c')
    """
    result: list[str] = []
    for value in values:
        for piece in value.split(","):
            stripped = piece.strip()
            if stripped:
                result.append(stripped)
    return tuple(result)


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


@dataclass(frozen=True)
class MoverConfig:
    """Validated, immutable configuration for a single run.

    Construct through build_config(). Option IDs left as None mean the
    corresponding status column is not used by this project and will never
    be targeted.
    """

    project_number: int
    project_owner: str
    project_owner_type: str  # "user" or "organization"
    status_field: str
    in_progress_option_id: str | None = None
    not_against_main_option_id: str | None = None
    needs_review_option_id: str | None = None
    ready_to_deploy_option_id: str | None = None
    conflicting_option_id: str | None = None
    ignored_option_ids: tuple[str, ...] = ()
    quiet: bool = False
    verbose: bool = False
    dry_run: bool = False
    gh_path: str = "gh"
    failing_test_label: str | None = None
    author: str | None = None
    allow_marking_drafts: bool = False
    build_names_for_rerun: tuple[str, ...] = ()  # stripped and lower-cased
    project_items_limit: int = DEFAULT_PROJECT_ITEMS_LIMIT
    pulls_per_query: int = DEFAULT_PULLS_PER_QUERY
    jobs: int = 1


def build_config(
    *,
    project_number: int | None,
    project_owner: str | None,
    project_owner_type: str | None,
    status_field: str | None,
    in_progress_option_id: str | None = None,
    not_against_main_option_id: str | None = None,
    needs_review_option_id: str | None = None,
    ready_to_deploy_option_id: str | None = None,
    conflicting_option_id: str | None = None,
    ignored_option_ids: Iterable[str] = (),
    quiet: bool = False,
    verbose: bool = False,
    dry_run: bool = False,
    gh_path: str | None = None,
    failing_test_label: str | None = None,
    author: str | None = None,
    allow_marking_drafts: bool = False,
    builds_to_rerun: Iterable[str] = (),
    project_items_limit: int = DEFAULT_PROJECT_ITEMS_LIMIT,
    pulls_per_query: int = DEFAULT_PULLS_PER_QUERY,
    jobs: int = 1,
) -> MoverConfig:
    """Validate raw option values and build a MoverConfig.

    Called before any network access, so a bad invocation never touches GitHub.

    Raises:
        ConfigError: Describing the first problem found
    """
    project_owner = _blank_to_none(project_owner)
    status_field = _blank_to_none(status_field)
    if project_number is None or project_owner is None or status_field is None:
        raise ConfigError("missing required options")
    if project_owner_type is None or project_owner_type not in VALID_OWNER_TYPES:
        raise ConfigError("invalid project owner type")

    option_ids = [
        _blank_to_none(option_id)
        for option_id in (
            in_progress_option_id,
            not_against_main_option_id,
            needs_review_option_id,
            ready_to_deploy_option_id,
            conflicting_option_id,
        )
    ]
    if not any(option_ids):
        raise ConfigError("you must specify at least one option ID for the status field")
    if pulls_per_query < 1:
        raise ConfigError("pulls per query must be at least 1")
    if jobs < 1:
        raise ConfigError("jobs must be at least 1")

    in_progress, not_against_main, needs_review, ready_to_deploy, conflicting = option_ids
    return MoverConfig(
        project_number=project_number,
        project_owner=project_owner,
        project_owner_type=project_owner_type,
        status_field=status_field,
        in_progress_option_id=in_progress,
        not_against_main_option_id=not_against_main,
        needs_review_option_id=needs_review,
        ready_to_deploy_option_id=ready_to_deploy,
        conflicting_option_id=conflicting,
        ignored_option_ids=split_list_values(ignored_option_ids),
        quiet=quiet,
        verbose=verbose,
        dry_run=dry_run,
        gh_path=gh_path or default_gh_path(),
        failing_test_label=_blank_to_none(failing_test_label),
        author=_blank_to_none(author),
        allow_marking_drafts=allow_marking_drafts,
        build_names_for_rerun=tuple(name.lower() for name in split_list_values(builds_to_rerun)),
        project_items_limit=project_items_limit,
        pulls_per_query=pulls_per_query,
        jobs=jobs,
    )
