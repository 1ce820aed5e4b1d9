"""Type definitions for GitHub operations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProjectItem:
    """One item from `gh project item-list`."""

    item_type: str  # "PullRequest", "Issue", "DraftIssue"
    number: int | None
    repo_name_with_owner: str | None  # e.g. "octo-org/some-repo"
    labels: tuple[str, ...] = ()

    @property
    def is_pull_request(self) -> bool:
        return self.item_type == "PullRequest"


@dataclass(frozen=True)
class AuthorPullRequest:
    """An open pull request returned by `gh search prs`."""

    number: int
    repo_name_with_owner: str


@dataclass(frozen=True)
class RequiredCheck:
    """A required check on a pull request, from `gh pr checks --required`."""

    name: str
    link: str
    state: str  # "SUCCESS", "FAILURE", "PENDING", ...
