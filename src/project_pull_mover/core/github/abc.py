"""Abstract base class for GitHub operations."""

from abc import ABC, abstractmethod
from typing import Any

from project_pull_mover.core.github.types import AuthorPullRequest, ProjectItem, RequiredCheck


class GitHub(ABC):
    """Abstract interface for GitHub operations.

    All implementations (real, dry-run and fake) must implement this interface.
    The decision engine and executor only ever talk to GitHub through it.
    """

    @abstractmethod
    def list_project_items(self, project_number: int, owner: str, limit: int) -> list[ProjectItem]:
        """List items in a project.

        Args:
            project_number: Project number, e.g. 123 for .../projects/123
            owner: Login of the user or organization owning the project
            limit: Maximum number of items to fetch

        Returns:
            All project items, of any content type

        Raises:
            NoDataError: If gh returned no output
        """
        ...

    @abstractmethod
    def run_graphql_query(self, query: str) -> dict[str, Any]:
        """Run a GraphQL query and return its data payload.

        Raises:
            GraphQLApiError: If the response carries no data
        """
        ...

    @abstractmethod
    def set_project_item_status(
        self,
        *,
        project_item_id: str,
        project_global_id: str,
        status_field_id: str,
        option_id: str,
    ) -> None:
        """Set the single-select status field of a project item."""
        ...

    @abstractmethod
    def apply_label(self, pr_number: int, repo_name_with_owner: str, label_name: str) -> None:
        """Add a label to a pull request."""
        ...

    @abstractmethod
    def remove_label(self, pr_number: int, repo_name_with_owner: str, label_name: str) -> None:
        """Remove a label from a pull request."""
        ...

    @abstractmethod
    def mark_as_draft(self, pr_number: int, repo_name_with_owner: str) -> None:
        """Convert a ready pull request back to a draft."""
        ...

    @abstractmethod
    def rerun_failed_run(self, run_id: str, repo_name_with_owner: str) -> None:
        """Re-run the failed jobs of a GitHub Actions workflow run."""
        ...

    @abstractmethod
    def get_failing_required_checks(
        self, pr_number: int, repo_name_with_owner: str
    ) -> list[RequiredCheck]:
        """Get the required checks of a pull request that are currently failing."""
        ...

    @abstractmethod
    def search_open_pull_requests_by_author(
        self, author: str, project_owner: str, project_number: int, limit: int
    ) -> list[AuthorPullRequest]:
        """Find open pull requests by an author that belong to a project.

        Raises:
            NoDataError: If gh returned no output
        """
        ...

    @abstractmethod
    def get_auth_status(self) -> str:
        """Return the human-readable output of `gh auth status`."""
        ...
