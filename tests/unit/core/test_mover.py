"""End-to-end tests for PullRequestMover over fake collaborators."""

from typing import Any

from project_pull_mover.core.executor import RunTotals
from project_pull_mover.core.github.types import RequiredCheck
from project_pull_mover.core.mover import PullRequestMover
from project_pull_mover.core.summary import NOTHING_CHANGED_MESSAGE
from tests.fakes.github import FakeGitHub
from tests.fakes.notifier import FakeNotifier
from tests.fakes.user_feedback import FakeUserFeedback
from tests.test_utils.builders import (
    FAILING_LABEL,
    IN_PROGRESS_ID,
    NEEDS_REVIEW_ID,
    make_config,
    make_project_item,
    owner_payload,
    pull_payload,
)


def _run(
    github: FakeGitHub, **config_overrides: Any
) -> tuple[RunTotals, FakeNotifier, FakeUserFeedback]:
    notifier = FakeNotifier()
    feedback = FakeUserFeedback()
    totals = PullRequestMover(github, notifier, make_config(**config_overrides), feedback).run()
    return totals, notifier, feedback


def test_run_moves_labels_and_notifies() -> None:
    github = FakeGitHub(
        project_items=[make_project_item(1)],
        graphql_responses=[
            {
                "organization": owner_payload("Team board"),
                "pullOctoOrgSomeRepo1": pull_payload(
                    current_option_id=NEEDS_REVIEW_ID,
                    current_option_name="Needs review",
                    failing_check_runs=[{"name": "CI / test", "isRequired": True}],
                ),
            }
        ],
        failing_checks={
            ("octo-org/some-repo", 1): [
                RequiredCheck(
                    name="CI / test",
                    link="https://github.com/octo-org/some-repo/actions/runs/77/job/1",
                    state="FAILURE",
                )
            ]
        },
    )

    totals, notifier, feedback = _run(
        github,
        failing_test_label=FAILING_LABEL,
        allow_marking_drafts=True,
        build_names_for_rerun=("ci",),
    )

    assert [update[3] for update in github.status_updates] == [IN_PROGRESS_ID]
    assert github.rerun_runs == [("octo-org/some-repo", "77")]
    assert github.drafted_pulls == [("octo-org/some-repo", 1)]
    assert github.applied_labels == [("octo-org/some-repo", 1, FAILING_LABEL)]
    summary = "Moved 1 pull request to 'In progress', applied 'failing-tests' to 1 pull request"
    assert totals.has_changes
    assert summary in feedback.texts("success")
    assert notifier.notifications == [("Team board", summary)]


def test_steady_state_run_makes_no_changes_and_no_notification() -> None:
    github = FakeGitHub(
        project_items=[make_project_item(1)],
        graphql_responses=[
            {
                "organization": owner_payload(),
                "pullOctoOrgSomeRepo1": pull_payload(current_option_id=NEEDS_REVIEW_ID),
            }
        ],
    )

    totals, notifier, feedback = _run(github)

    assert not totals.has_changes
    assert github.mutation_count == 0
    assert notifier.notifications == []
    assert NOTHING_CHANGED_MESSAGE in feedback.texts("info")


def test_empty_project_returns_without_summary() -> None:
    github = FakeGitHub(project_items=[])

    totals, notifier, feedback = _run(github)

    assert not totals.has_changes
    assert notifier.notifications == []
    assert NOTHING_CHANGED_MESSAGE not in feedback.texts()


def test_author_filter_leaving_no_pull_requests_reports_nothing_changed() -> None:
    github = FakeGitHub(
        project_items=[make_project_item(1)],
        graphql_responses=[{"organization": owner_payload("Team board")}],
        author_pulls={"octocat": []},
    )

    totals, notifier, feedback = _run(github, author="octocat")

    assert not totals.has_changes
    assert notifier.notifications == []
    assert github.status_updates == []
    assert NOTHING_CHANGED_MESSAGE in feedback.texts("info")


def test_parallel_run_merges_totals_from_every_pull_request() -> None:
    items = [make_project_item(number) for number in range(1, 6)]
    response: dict[str, Any] = {"organization": owner_payload()}
    for number in range(1, 6):
        response[f"pullOctoOrgSomeRepo{number}"] = pull_payload(item_id=f"item-{number}")
    github = FakeGitHub(project_items=items, graphql_responses=[response])

    totals, _, _ = _run(github, jobs=3)

    assert totals.moved_by_status == {"In progress": 5}
    assert sorted(update[0] for update in github.status_updates) == [
        f"item-{number}" for number in range(1, 6)
    ]
