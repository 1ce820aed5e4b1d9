"""Snapshot of a pull request's state as fetched for one run."""

from dataclasses import dataclass
from enum import Enum

from project_pull_mover.core.errors import MissingPullRequestDataError
from project_pull_mover.core.github.graphql_models import PullRequestData, RepositoryData
from project_pull_mover.core.github.types import ProjectItem

FAILING_CHECK_STATES = frozenset({"FAILURE"})


class ReviewDecision(Enum):
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    REVIEW_REQUIRED = "REVIEW_REQUIRED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_api(cls, value: str | None) -> "ReviewDecision":
        # reviewDecision is null when the repository requires no reviews
        if value is None:
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class MergeableState(Enum):
    MERGEABLE = "MERGEABLE"
    CONFLICTING = "CONFLICTING"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_api(cls, value: str | None) -> "MergeableState":
        if value is None:
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class CheckResult:
    """A check on the last commit, from either check suites or legacy statuses."""

    name: str
    is_required: bool
    state: str

    @property
    def is_failing(self) -> bool:
        return self.state in FAILING_CHECK_STATES


@dataclass(frozen=True)
class ProjectPlacement:
    """Where a pull request sits in the target project."""

    project_item_id: str
    project_global_id: str
    status_field_id: str | None
    current_option_id: str | None
    current_option_name: str | None


def split_repo_name_with_owner(item: ProjectItem) -> tuple[str, str, int]:
    """Return (owner, name, number) for a project item.

    Raises:
        MissingPullRequestDataError: If the item lacks repository or number
    """
    nwo = item.repo_name_with_owner
    if not nwo or "/" not in nwo or item.number is None:
        msg = f"Project item is missing repository or pull request number: {item!r}"
        raise MissingPullRequestDataError(msg)
    owner, name = nwo.split("/", 1)
    return owner, name, item.number


def _collect_check_results(pull: PullRequestData) -> tuple[CheckResult, ...]:
    if not pull.commits.nodes:
        return ()
    commit = pull.commits.nodes[0].commit

    # The query only asks for check runs with unsuccessful conclusions, so
    # every check run returned is a failure.
    results = [
        CheckResult(name=run.name, is_required=run.is_required, state="FAILURE")
        for suite in commit.check_suites.nodes
        for run in suite.check_runs.nodes
    ]
    if commit.status is not None:
        results.extend(
            CheckResult(name=ctx.context, is_required=ctx.is_required, state=ctx.state)
            for ctx in commit.status.contexts
        )
    return tuple(results)


def _find_placement(pull: PullRequestData, project_number: int) -> ProjectPlacement | None:
    for node in pull.project_items.nodes:
        if node.project.number != project_number:
            continue
        value = node.field_value_by_name
        return ProjectPlacement(
            project_item_id=node.id,
            project_global_id=node.project.id,
            status_field_id=value.field.id if value is not None and value.field else None,
            current_option_id=value.option_id if value is not None else None,
            current_option_name=value.name if value is not None else None,
        )
    return None


@dataclass(frozen=True)
class PullRequestSnapshot:
    """Immutable view of one pull request, built fresh every run.

    Every attribute is resolved at construction time; the derived predicates
    are plain properties over those attributes.
    """

    repo_owner: str
    repo_name: str
    number: int
    is_draft: bool
    is_in_merge_queue: bool
    review_decision: ReviewDecision
    mergeable_state: MergeableState
    base_branch_name: str
    default_branch_name: str
    labels: frozenset[str] = frozenset()
    check_results: tuple[CheckResult, ...] = ()
    placement: ProjectPlacement | None = None

    @classmethod
    def from_graphql(
        cls, item: ProjectItem, repository: RepositoryData, project_number: int
    ) -> "PullRequestSnapshot":
        """Combine a project item with its GraphQL repository payload.

        Raises:
            MissingPullRequestDataError: If identity or pull request data is absent
        """
        owner, name, number = split_repo_name_with_owner(item)
        pull = repository.pull_request
        if pull is None:
            msg = f"No pull request data returned for {owner}/{name}#{number}"
            raise MissingPullRequestDataError(msg)
        if repository.default_branch_ref is None:
            msg = f"No default branch returned for {owner}/{name}"
            raise MissingPullRequestDataError(msg)

        return cls(
            repo_owner=owner,
            repo_name=name,
            number=number,
            is_draft=pull.is_draft,
            is_in_merge_queue=pull.is_in_merge_queue,
            review_decision=ReviewDecision.from_api(pull.review_decision),
            mergeable_state=MergeableState.from_api(pull.mergeable),
            base_branch_name=pull.base_ref_name,
            default_branch_name=repository.default_branch_ref.name,
            labels=frozenset(item.labels),
            check_results=_collect_check_results(pull),
            placement=_find_placement(pull, project_number),
        )

    def __str__(self) -> str:
        return f"{self.repo_name_with_owner}#{self.number}"

    @property
    def repo_name_with_owner(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}"

    @property
    def current_status_option_id(self) -> str | None:
        return self.placement.current_option_id if self.placement else None

    @property
    def current_status_option_name(self) -> str | None:
        return self.placement.current_option_name if self.placement else None

    @property
    def is_against_default_branch(self) -> bool:
        return self.base_branch_name == self.default_branch_name

    @property
    def is_daisy_chained(self) -> bool:
        return not self.is_against_default_branch

    @property
    def has_failing_required_builds(self) -> bool:
        return any(check.is_required and check.is_failing for check in self.check_results)

    @property
    def is_approved(self) -> bool:
        return self.review_decision is ReviewDecision.APPROVED

    @property
    def is_conflicting(self) -> bool:
        return self.mergeable_state is MergeableState.CONFLICTING

    @property
    def is_unknown_merge_state(self) -> bool:
        return self.mergeable_state is MergeableState.UNKNOWN

    def has_label(self, label_name: str) -> bool:
        return label_name in self.labels
