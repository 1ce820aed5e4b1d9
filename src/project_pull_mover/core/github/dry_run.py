"""No-op wrapper for GitHub operations."""

from typing import Any

from project_pull_mover.core.github.abc import GitHub
from project_pull_mover.core.github.types import AuthorPullRequest, ProjectItem, RequiredCheck


class DryRunGitHub(GitHub):
    """No-op wrapper for GitHub operations.

    Read operations are delegated to the wrapped implementation.
    Write operations return without executing (no-op behavior).

    This wrapper prevents project and pull request mutations from executing in
    dry-run mode, while still allowing the full decision pass to run against
    live data.
    """

    def __init__(self, wrapped: GitHub) -> None:
        """Initialize dry-run wrapper with a real implementation.

        Args:
            wrapped: The real GitHub operations implementation to wrap
        """
        self._wrapped = wrapped

    def list_project_items(self, project_number: int, owner: str, limit: int) -> list[ProjectItem]:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.list_project_items(project_number, owner, limit)

    def run_graphql_query(self, query: str) -> dict[str, Any]:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.run_graphql_query(query)

    def set_project_item_status(
        self,
        *,
        project_item_id: str,
        project_global_id: str,
        status_field_id: str,
        option_id: str,
    ) -> None:
        """No-op for setting project item status in dry-run mode."""
        pass

    def apply_label(self, pr_number: int, repo_name_with_owner: str, label_name: str) -> None:
        """No-op for applying a label in dry-run mode."""
        pass

    def remove_label(self, pr_number: int, repo_name_with_owner: str, label_name: str) -> None:
        """No-op for removing a label in dry-run mode."""
        pass

    def mark_as_draft(self, pr_number: int, repo_name_with_owner: str) -> None:
        """No-op for marking a pull request as draft in dry-run mode."""
        pass

    def rerun_failed_run(self, run_id: str, repo_name_with_owner: str) -> None:
        """No-op for re-running a workflow run in dry-run mode."""
        pass

    def get_failing_required_checks(
        self, pr_number: int, repo_name_with_owner: str
    ) -> list[RequiredCheck]:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.get_failing_required_checks(pr_number, repo_name_with_owner)

    def search_open_pull_requests_by_author(
        self, author: str, project_owner: str, project_number: int, limit: int
    ) -> list[AuthorPullRequest]:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.search_open_pull_requests_by_author(
            author, project_owner, project_number, limit
        )

    def get_auth_status(self) -> str:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.get_auth_status()
