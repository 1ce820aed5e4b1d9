"""Loads project items and per-pull-request GraphQL data into snapshots."""

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from project_pull_mover.core.config import MoverConfig
from project_pull_mover.core.errors import GhOutputParseError
from project_pull_mover.core.github.abc import GitHub
from project_pull_mover.core.github.graphql_models import ProjectOwnerData, RepositoryData
from project_pull_mover.core.github.types import ProjectItem
from project_pull_mover.core.pull_request import PullRequestSnapshot
from project_pull_mover.core.queries import (
    assign_aliases,
    build_batched_queries,
    owner_field,
    pull_request_field,
)
from project_pull_mover.core.status_options import StatusOptionRegistry
from project_pull_mover.core.user_feedback import UserFeedback

logger = logging.getLogger(__name__)

UNKNOWN_PROJECT_TITLE = "Unknown project"


def _units(count: int, singular: str) -> str:
    return singular if count == 1 else f"{singular}s"


@dataclass(frozen=True)
class LoadResult:
    """Everything a run needs after the fetch phase.

    `project_has_pull_requests` is false only when the project listing held no
    pull requests at all; `pull_requests` can still be empty when it is true,
    e.g. after the author filter.
    """

    project_title: str
    registry: StatusOptionRegistry
    pull_requests: list[PullRequestSnapshot] = field(default_factory=list)
    project_has_pull_requests: bool = False


class DataLoader:
    """Fetches project data in two phases and assembles PullRequestSnapshots.

    Phase one lists the project's items; phase two issues batched GraphQL
    queries for the pull requests among them. Any fetch failure propagates
    and aborts the run.
    """

    def __init__(self, github: GitHub, config: MoverConfig, feedback: UserFeedback) -> None:
        self._github = github
        self._config = config
        self._feedback = feedback

    def load(self) -> LoadResult:
        config = self._config

        self._feedback.loading(
            f"Looking up items in project {config.project_number} "
            f"owned by @{config.project_owner}..."
        )
        all_items = self._github.list_project_items(
            config.project_number, config.project_owner, config.project_items_limit
        )
        self._feedback.info(f"Found {len(all_items)} {_units(len(all_items), 'item')} in project")

        items = [item for item in all_items if item.is_pull_request]
        if not items:
            self._feedback.success(
                f"No pull requests found in project {config.project_number} "
                f"by @{config.project_owner}"
            )
            return LoadResult(
                project_title=UNKNOWN_PROJECT_TITLE,
                registry=StatusOptionRegistry.from_config(config, None),
            )

        self._feedback.success(
            f"Found {len(items)} {_units(len(items), 'pull request')} in project"
        )

        if config.author:
            items = self._filter_by_author(items, config.author)

        return self._load_graphql_data(items)

    def _filter_by_author(self, items: list[ProjectItem], author: str) -> list[ProjectItem]:
        config = self._config

        self._feedback.info(f"Looking up open pull requests by @{author} in project...")
        author_pulls = self._github.search_open_pull_requests_by_author(
            author, config.project_owner, config.project_number, config.project_items_limit
        )
        numbers_by_repo: dict[str, set[int]] = {}
        for pull in author_pulls:
            numbers_by_repo.setdefault(pull.repo_name_with_owner, set()).add(pull.number)

        filtered = [
            item
            for item in items
            if item.repo_name_with_owner in numbers_by_repo
            and item.number in numbers_by_repo[item.repo_name_with_owner]
        ]
        if len(filtered) == len(items):
            self._feedback.info(f"All PRs in project were authored by @{author}")
        else:
            self._feedback.info(
                f"Filtered PRs in project down to {len(filtered)} "
                f"{_units(len(filtered), 'pull request')} authored by @{author}"
            )
        return filtered

    def _load_graphql_data(self, items: list[ProjectItem]) -> LoadResult:
        config = self._config

        self._feedback.loading("Looking up more info about each pull request in project...")
        aliases = assign_aliases(items)
        pull_fields = [
            pull_request_field(item, config.status_field, alias)
            for item, alias in zip(items, aliases, strict=True)
        ]
        queries = build_batched_queries(
            owner_field(
                config.project_owner_type,
                config.project_owner,
                config.project_number,
                config.status_field,
            ),
            pull_fields,
            config.pulls_per_query,
        )
        self._feedback.info(f"Will make {len(queries)} API request(s) to get pull request data")

        graphql_data: dict[str, Any] = {}
        for index, query in enumerate(queries, start=1):
            self._feedback.loading(f"Making API request {index} of {len(queries)}...")
            graphql_data.update(self._github.run_graphql_query(query))

        owner_payload = graphql_data.get(config.project_owner_type)
        project_data = None
        if owner_payload is not None:
            try:
                project_data = ProjectOwnerData.model_validate(owner_payload).project_v2
            except ValidationError as e:
                msg = f"Unexpected project data from the GraphQL API: {e}"
                raise GhOutputParseError(msg) from e
        registry = StatusOptionRegistry.from_config(config, project_data)

        status_field = config.status_field
        self._feedback.info(
            f"'{status_field}' options enabled: {', '.join(registry.enabled_option_names)}"
        )
        self._feedback.info(
            f"Ignored '{status_field}' options: {', '.join(registry.ignored_option_names)}"
        )

        snapshots: list[PullRequestSnapshot] = []
        for item, alias in zip(items, aliases, strict=True):
            snapshot = self._build_snapshot(item, graphql_data.get(alias))
            if snapshot is not None:
                snapshots.append(snapshot)

        self._feedback.success("Loaded extra pull request info from the API")
        return LoadResult(
            project_title=project_data.title if project_data else UNKNOWN_PROJECT_TITLE,
            registry=registry,
            pull_requests=snapshots,
            project_has_pull_requests=True,
        )

    def _build_snapshot(
        self, item: ProjectItem, payload: dict[str, Any] | None
    ) -> PullRequestSnapshot | None:
        # Inaccessible repositories come back as null alongside a GraphQL error
        if payload is None:
            logger.warning(
                "No data returned for %s#%s, skipping", item.repo_name_with_owner, item.number
            )
            return None
        try:
            repository = RepositoryData.model_validate(payload)
        except ValidationError as e:
            msg = (
                f"Unexpected pull request data from the GraphQL API for "
                f"{item.repo_name_with_owner}#{item.number}: {e}"
            )
            raise GhOutputParseError(msg) from e
        if repository.pull_request is None:
            logger.warning(
                "No pull request returned for %s#%s, skipping",
                item.repo_name_with_owner,
                item.number,
            )
            return None
        return PullRequestSnapshot.from_graphql(item, repository, self._config.project_number)
