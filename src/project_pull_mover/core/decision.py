"""Status decision engine.

Decides, for one pull request, which status column it belongs in and which
side effects (draft marking, build re-runs, failing-test label) should go with
the move. Everything here is pure: no gh calls, no output.

Target statuses are checked in a fixed precedence order and the first match
wins:

    Conflicting > Not against main > Ready to deploy > Needs review > In progress

A pull request currently sitting in an ignored column is left completely
alone.
"""

from dataclasses import dataclass
from enum import Enum

from project_pull_mover.core.pull_request import PullRequestSnapshot
from project_pull_mover.core.status_options import LogicalStatus, StatusOptionRegistry

STATUS_PRECEDENCE: tuple[LogicalStatus, ...] = (
    LogicalStatus.CONFLICTING,
    LogicalStatus.NOT_AGAINST_MAIN,
    LogicalStatus.READY_TO_DEPLOY,
    LogicalStatus.NEEDS_REVIEW,
    LogicalStatus.IN_PROGRESS,
)

# Branches that take a pull request away from review; reaching them may
# convert the pull request back to a draft.
DRAFT_MARKING_STATUSES = frozenset(
    {LogicalStatus.CONFLICTING, LogicalStatus.NOT_AGAINST_MAIN, LogicalStatus.IN_PROGRESS}
)


class LabelAction(Enum):
    NONE = "none"
    APPLY = "apply"
    REMOVE = "remove"


@dataclass(frozen=True)
class ChangeOutcome:
    """What should change for one pull request.

    `target_status` is the branch that was taken, even when `is_no_op` is true;
    the executor skips the status mutation for no-ops but still honors the
    branch's side effects.
    """

    target_status: LogicalStatus | None = None
    is_no_op: bool = False
    should_mark_draft: bool = False
    should_rerun_builds: bool = False
    label_action: LabelAction = LabelAction.NONE
    label_name: str | None = None

    @property
    def changes_status(self) -> bool:
        return self.target_status is not None and not self.is_no_op

    @property
    def has_changes(self) -> bool:
        return (
            self.changes_status
            or self.should_mark_draft
            or self.should_rerun_builds
            or self.label_action is not LabelAction.NONE
        )


UNCHANGED = ChangeOutcome()


class StatusDecisionEngine:
    """Pure decision rules over a snapshot and the run's status options."""

    def __init__(
        self,
        registry: StatusOptionRegistry,
        *,
        allow_marking_drafts: bool = False,
        failing_test_label: str | None = None,
    ) -> None:
        self._registry = registry
        self._allow_marking_drafts = allow_marking_drafts
        self._failing_test_label = failing_test_label

    def _has_status(self, pull: PullRequestSnapshot, status: LogicalStatus) -> bool:
        return self._registry.has_status(pull.current_status_option_id, status)

    def has_ignored_status(self, pull: PullRequestSnapshot) -> bool:
        return self._registry.is_ignored(pull.current_status_option_id)

    def should_have_conflicting_status(self, pull: PullRequestSnapshot) -> bool:
        if not self._registry.is_enabled(LogicalStatus.CONFLICTING):
            return False
        return pull.is_against_default_branch and pull.is_conflicting and not pull.is_in_merge_queue

    def should_have_not_against_main_status(self, pull: PullRequestSnapshot) -> bool:
        if not self._registry.is_enabled(LogicalStatus.NOT_AGAINST_MAIN):
            return False
        return pull.is_daisy_chained

    def should_have_ready_to_deploy_status(self, pull: PullRequestSnapshot) -> bool:
        if not self._registry.is_enabled(LogicalStatus.READY_TO_DEPLOY):
            return False
        return not pull.is_draft and pull.is_in_merge_queue

    def should_have_needs_review_status(self, pull: PullRequestSnapshot) -> bool:
        if not self._registry.is_enabled(LogicalStatus.NEEDS_REVIEW):
            return False
        # Conflicts to resolve, still a draft, or base branch will change later
        if pull.is_conflicting or pull.is_draft or pull.is_daisy_chained:
            return False

        has_ready_to_deploy_column = self._registry.is_enabled(LogicalStatus.READY_TO_DEPLOY)
        # Already queued for an automatic deploy; asking for review is pointless
        if pull.is_in_merge_queue and has_ready_to_deploy_column:
            return False

        # Approval only matters when there is a column to move to after review
        already_approved_check = not pull.is_approved if has_ready_to_deploy_column else True

        return already_approved_check and (
            self._has_status(pull, LogicalStatus.IN_PROGRESS)
            or self._has_status(pull, LogicalStatus.CONFLICTING)
            or self._has_status(pull, LogicalStatus.READY_TO_DEPLOY)
            or self._has_status(pull, LogicalStatus.NOT_AGAINST_MAIN)
        )

    def should_have_in_progress_status(self, pull: PullRequestSnapshot) -> bool:
        if not self._registry.is_enabled(LogicalStatus.IN_PROGRESS):
            return False
        if pull.is_in_merge_queue:
            return False

        if self._registry.is_enabled(LogicalStatus.CONFLICTING):
            # Never assume it isn't conflicting when GitHub can't tell yet
            if pull.is_conflicting or pull.is_unknown_merge_state:
                return False

        # 'Not against main' owns daisy-chained pull requests when it exists
        if pull.is_daisy_chained and self._registry.is_enabled(LogicalStatus.NOT_AGAINST_MAIN):
            return False

        if self._has_status(pull, LogicalStatus.NEEDS_REVIEW) or self._has_status(
            pull, LogicalStatus.READY_TO_DEPLOY
        ):
            return pull.has_failing_required_builds or pull.is_draft

        return not pull.is_approved or pull.is_draft

    def should_have_status(self, pull: PullRequestSnapshot, status: LogicalStatus) -> bool:
        match status:
            case LogicalStatus.CONFLICTING:
                return self.should_have_conflicting_status(pull)
            case LogicalStatus.NOT_AGAINST_MAIN:
                return self.should_have_not_against_main_status(pull)
            case LogicalStatus.READY_TO_DEPLOY:
                return self.should_have_ready_to_deploy_status(pull)
            case LogicalStatus.NEEDS_REVIEW:
                return self.should_have_needs_review_status(pull)
            case LogicalStatus.IN_PROGRESS:
                return self.should_have_in_progress_status(pull)

    def target_status(self, pull: PullRequestSnapshot) -> LogicalStatus | None:
        """First status in precedence order whose rule matches, or None."""
        if self.has_ignored_status(pull):
            return None
        for status in STATUS_PRECEDENCE:
            if self.should_have_status(pull, status):
                return status
        return None

    def can_mark_as_draft(self, pull: PullRequestSnapshot) -> bool:
        return self._allow_marking_drafts and not pull.is_draft and not pull.is_in_merge_queue

    def label_action(self, pull: PullRequestSnapshot) -> LabelAction:
        label = self._failing_test_label
        if label is None:
            return LabelAction.NONE
        failing = pull.has_failing_required_builds
        if failing and not pull.has_label(label):
            return LabelAction.APPLY
        if not failing and pull.has_label(label):
            return LabelAction.REMOVE
        return LabelAction.NONE

    def decide(self, pull: PullRequestSnapshot) -> ChangeOutcome:
        """Decide every change for one pull request."""
        if self.has_ignored_status(pull):
            return UNCHANGED

        label_action = self.label_action(pull)
        label_name = self._failing_test_label if label_action is not LabelAction.NONE else None

        target = self.target_status(pull)
        if target is None:
            return ChangeOutcome(label_action=label_action, label_name=label_name)

        is_no_op = self._has_status(pull, target)
        return ChangeOutcome(
            target_status=target,
            is_no_op=is_no_op,
            should_mark_draft=target in DRAFT_MARKING_STATUSES and self.can_mark_as_draft(pull),
            should_rerun_builds=target is LogicalStatus.IN_PROGRESS and not is_no_op,
            label_action=label_action,
            label_name=label_name,
        )
