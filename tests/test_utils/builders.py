"""Builders for snapshots, registries, configs and GraphQL payloads used in tests."""

from typing import Any

from project_pull_mover.core.config import MoverConfig
from project_pull_mover.core.github.types import ProjectItem
from project_pull_mover.core.pull_request import (
    CheckResult,
    MergeableState,
    ProjectPlacement,
    PullRequestSnapshot,
    ReviewDecision,
)
from project_pull_mover.core.status_options import (
    DEFAULT_OPTION_NAMES,
    LogicalStatus,
    StatusOption,
    StatusOptionRegistry,
)

IN_PROGRESS_ID = "opt-in-progress"
NOT_AGAINST_MAIN_ID = "opt-not-against-main"
NEEDS_REVIEW_ID = "opt-needs-review"
READY_TO_DEPLOY_ID = "opt-ready-to-deploy"
CONFLICTING_ID = "opt-conflicting"
IGNORED_ID = "opt-ignored"

OPTION_IDS: dict[LogicalStatus, str] = {
    LogicalStatus.IN_PROGRESS: IN_PROGRESS_ID,
    LogicalStatus.NOT_AGAINST_MAIN: NOT_AGAINST_MAIN_ID,
    LogicalStatus.NEEDS_REVIEW: NEEDS_REVIEW_ID,
    LogicalStatus.READY_TO_DEPLOY: READY_TO_DEPLOY_ID,
    LogicalStatus.CONFLICTING: CONFLICTING_ID,
}

STATUS_FIELD_ID = "field-status"
PROJECT_GLOBAL_ID = "project-global-1"
PROJECT_NUMBER = 3
FAILING_LABEL = "failing-tests"


def make_registry(
    enabled: tuple[LogicalStatus, ...] = tuple(LogicalStatus),
    *,
    ignored_option_ids: frozenset[str] = frozenset({IGNORED_ID}),
) -> StatusOptionRegistry:
    """Registry with the given statuses configured under their test option IDs."""
    return StatusOptionRegistry(
        status_field_name="Status",
        options={
            status: StatusOption(option_id=OPTION_IDS[status], name=DEFAULT_OPTION_NAMES[status])
            for status in enabled
        },
        ignored_option_ids=ignored_option_ids,
    )


def make_placement(
    current_option_id: str | None, current_option_name: str | None = None
) -> ProjectPlacement:
    return ProjectPlacement(
        project_item_id="item-1",
        project_global_id=PROJECT_GLOBAL_ID,
        status_field_id=STATUS_FIELD_ID,
        current_option_id=current_option_id,
        current_option_name=current_option_name,
    )


def failing_required_check(name: str = "ci / test") -> CheckResult:
    return CheckResult(name=name, is_required=True, state="FAILURE")


def make_pull(
    *,
    number: int = 1,
    repo_owner: str = "octo-org",
    repo_name: str = "some-repo",
    current_option_id: str | None = None,
    current_option_name: str | None = None,
    is_draft: bool = False,
    is_in_merge_queue: bool = False,
    review_decision: ReviewDecision = ReviewDecision.REVIEW_REQUIRED,
    mergeable_state: MergeableState = MergeableState.MERGEABLE,
    base_branch_name: str = "main",
    default_branch_name: str = "main",
    labels: frozenset[str] = frozenset(),
    check_results: tuple[CheckResult, ...] = (),
    has_placement: bool = True,
) -> PullRequestSnapshot:
    """Snapshot of an open, mergeable, unapproved pull request against main."""
    return PullRequestSnapshot(
        repo_owner=repo_owner,
        repo_name=repo_name,
        number=number,
        is_draft=is_draft,
        is_in_merge_queue=is_in_merge_queue,
        review_decision=review_decision,
        mergeable_state=mergeable_state,
        base_branch_name=base_branch_name,
        default_branch_name=default_branch_name,
        labels=labels,
        check_results=check_results,
        placement=make_placement(current_option_id, current_option_name) if has_placement else None,
    )


def make_config(**overrides: Any) -> MoverConfig:
    """MoverConfig with every status configured and quiet defaults."""
    values: dict[str, Any] = {
        "project_number": PROJECT_NUMBER,
        "project_owner": "octo-org",
        "project_owner_type": "organization",
        "status_field": "Status",
        "in_progress_option_id": IN_PROGRESS_ID,
        "not_against_main_option_id": NOT_AGAINST_MAIN_ID,
        "needs_review_option_id": NEEDS_REVIEW_ID,
        "ready_to_deploy_option_id": READY_TO_DEPLOY_ID,
        "conflicting_option_id": CONFLICTING_ID,
        "ignored_option_ids": (IGNORED_ID,),
        "gh_path": "gh",
    }
    values.update(overrides)
    return MoverConfig(**values)


def make_project_item(
    number: int = 1,
    repo_name_with_owner: str = "octo-org/some-repo",
    *,
    item_type: str = "PullRequest",
    labels: tuple[str, ...] = (),
) -> ProjectItem:
    return ProjectItem(
        item_type=item_type,
        number=number,
        repo_name_with_owner=repo_name_with_owner,
        labels=labels,
    )


def pull_payload(
    *,
    current_option_id: str | None = None,
    current_option_name: str | None = None,
    is_draft: bool = False,
    is_in_merge_queue: bool = False,
    review_decision: str | None = "REVIEW_REQUIRED",
    mergeable: str = "MERGEABLE",
    base_ref_name: str = "main",
    default_branch: str = "main",
    failing_check_runs: list[dict[str, Any]] | None = None,
    status_contexts: list[dict[str, Any]] | None = None,
    project_number: int = PROJECT_NUMBER,
    item_id: str = "item-1",
) -> dict[str, Any]:
    """A `repository { pullRequest { ... } }` payload as GitHub returns it."""
    field_value: dict[str, Any] = {}
    if current_option_id is not None:
        field_value = {
            "field": {"id": STATUS_FIELD_ID},
            "optionId": current_option_id,
            "name": current_option_name,
        }
    return {
        "id": "repo-1",
        "defaultBranchRef": {"name": default_branch},
        "pullRequest": {
            "isDraft": is_draft,
            "isInMergeQueue": is_in_merge_queue,
            "reviewDecision": review_decision,
            "mergeable": mergeable,
            "baseRefName": base_ref_name,
            "commits": {
                "nodes": [
                    {
                        "commit": {
                            "checkSuites": {
                                "nodes": [{"checkRuns": {"nodes": failing_check_runs or []}}]
                            },
                            "status": (
                                {"contexts": status_contexts}
                                if status_contexts is not None
                                else None
                            ),
                        }
                    }
                ]
            },
            "projectItems": {
                "nodes": [
                    {
                        "id": item_id,
                        "project": {"id": PROJECT_GLOBAL_ID, "number": project_number},
                        "fieldValueByName": field_value,
                    }
                ]
            },
        },
    }


def owner_payload(title: str = "Team board") -> dict[str, Any]:
    """The `organization { projectV2 { ... } }` payload with all status options."""
    options = [
        {"id": option_id, "name": DEFAULT_OPTION_NAMES[status]}
        for status, option_id in OPTION_IDS.items()
    ]
    options.append({"id": IGNORED_ID, "name": "On hold"})
    return {
        "projectV2": {"title": title, "field": {"id": STATUS_FIELD_ID, "options": options}}
    }
