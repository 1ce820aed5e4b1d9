"""Applies decision outcomes through the GitHub client and tallies the results."""

from collections import Counter
from dataclasses import dataclass, field

from project_pull_mover.core.decision import ChangeOutcome, LabelAction
from project_pull_mover.core.errors import MissingPullRequestDataError
from project_pull_mover.core.github.abc import GitHub
from project_pull_mover.core.github.parsing import parse_run_id_from_check_link
from project_pull_mover.core.pull_request import PullRequestSnapshot
from project_pull_mover.core.status_options import LogicalStatus, StatusOptionRegistry
from project_pull_mover.core.user_feedback import UserFeedback


@dataclass
class RunTotals:
    """Per-category change counts, keyed by human-readable name.

    Workers each build their own RunTotals; they are combined with merge()
    once all pull requests are processed.
    """

    moved_by_status: Counter[str] = field(default_factory=Counter)
    labels_applied: Counter[str] = field(default_factory=Counter)
    labels_removed: Counter[str] = field(default_factory=Counter)

    @property
    def has_changes(self) -> bool:
        return bool(self.moved_by_status or self.labels_applied or self.labels_removed)

    def merge(self, other: "RunTotals") -> "RunTotals":
        return RunTotals(
            moved_by_status=self.moved_by_status + other.moved_by_status,
            labels_applied=self.labels_applied + other.labels_applied,
            labels_removed=self.labels_removed + other.labels_removed,
        )


class ChangeExecutor:
    """Turns a ChangeOutcome into gh mutations for one pull request at a time."""

    def __init__(
        self,
        github: GitHub,
        registry: StatusOptionRegistry,
        feedback: UserFeedback,
        *,
        build_names_for_rerun: tuple[str, ...] = (),
    ) -> None:
        self._github = github
        self._registry = registry
        self._feedback = feedback
        self._build_names_for_rerun = build_names_for_rerun

    def apply(self, pull: PullRequestSnapshot, outcome: ChangeOutcome) -> RunTotals:
        """Execute every change in `outcome` and return this pull request's tallies."""
        totals = RunTotals()
        if not outcome.has_changes:
            return totals

        if outcome.target_status is not None and outcome.changes_status:
            new_name = self._set_status(pull, outcome.target_status)
            totals.moved_by_status[new_name] += 1
            if outcome.should_rerun_builds:
                self._rerun_failing_required_builds(pull)

        if outcome.should_mark_draft:
            self._feedback.loading(f"Marking {pull} as a draft...")
            self._github.mark_as_draft(pull.number, pull.repo_name_with_owner)

        if outcome.label_name is not None:
            if outcome.label_action is LabelAction.APPLY:
                self._feedback.loading(f"Applying label '{outcome.label_name}' to {pull}...")
                self._github.apply_label(
                    pull.number, pull.repo_name_with_owner, outcome.label_name
                )
                totals.labels_applied[outcome.label_name] += 1
            elif outcome.label_action is LabelAction.REMOVE:
                self._feedback.loading(f"Removing label '{outcome.label_name}' from {pull}...")
                self._github.remove_label(
                    pull.number, pull.repo_name_with_owner, outcome.label_name
                )
                totals.labels_removed[outcome.label_name] += 1

        return totals

    def _set_status(self, pull: PullRequestSnapshot, status: LogicalStatus) -> str:
        option = self._registry.option_for(status)
        if option is None:
            msg = f"Status {status.value} is not configured; cannot move {pull}"
            raise MissingPullRequestDataError(msg)

        placement = pull.placement
        if placement is None:
            msg = f"{pull} has no item in the project"
            raise MissingPullRequestDataError(msg)
        # Items with no status yet carry no field reference of their own
        status_field_id = placement.status_field_id or self._registry.status_field_id
        if status_field_id is None:
            msg = f"Cannot find the '{self._registry.status_field_name}' field to move {pull}"
            raise MissingPullRequestDataError(msg)

        old_name = placement.current_option_name
        self._feedback.loading(f"Moving {pull} out of '{old_name}' column to '{option.name}'...")
        self._github.set_project_item_status(
            project_item_id=placement.project_item_id,
            project_global_id=placement.project_global_id,
            status_field_id=status_field_id,
            option_id=option.option_id,
        )
        return option.name

    def _rerun_failing_required_builds(self, pull: PullRequestSnapshot) -> None:
        if not self._build_names_for_rerun:
            return

        run_ids_by_name = self._failed_required_run_ids_by_name(pull)
        rerun_ids: set[str] = set()
        for build_name in self._build_names_for_rerun:
            run_id = find_run_id_for_build_name(run_ids_by_name, build_name)
            # One re-run per distinct run, even when several build names match it
            if run_id is None or run_id in rerun_ids:
                continue
            rerun_ids.add(run_id)
            self._feedback.loading(f"Rerunning failed run {run_id} for {pull}...")
            self._github.rerun_failed_run(run_id, pull.repo_name_with_owner)

    def _failed_required_run_ids_by_name(self, pull: PullRequestSnapshot) -> dict[str, str]:
        run_ids_by_name: dict[str, str] = {}
        checks = self._github.get_failing_required_checks(pull.number, pull.repo_name_with_owner)
        for check in checks:
            run_id = parse_run_id_from_check_link(check.link)
            if run_id is not None:
                run_ids_by_name[check.name.strip().lower()] = run_id
        return run_ids_by_name


def find_run_id_for_build_name(run_ids_by_name: dict[str, str], build_name: str) -> str | None:
    """Find the run for a build name: exact match first, then first substring match.

    Args:
        run_ids_by_name: Lower-cased check name -> run ID, in check order
        build_name: Lower-cased, stripped build name or fragment

    Returns:
        The matching run ID, or None
    """
    if build_name in run_ids_by_name:
        return run_ids_by_name[build_name]
    for name, run_id in run_ids_by_name.items():
        if build_name in name:
            return run_id
    return None
