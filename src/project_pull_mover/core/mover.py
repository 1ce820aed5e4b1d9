"""Top-level run: load, decide, execute, summarize."""

import logging
from concurrent.futures import ThreadPoolExecutor

from project_pull_mover.core.config import MoverConfig
from project_pull_mover.core.data_loader import DataLoader
from project_pull_mover.core.decision import StatusDecisionEngine
from project_pull_mover.core.executor import ChangeExecutor, RunTotals
from project_pull_mover.core.github.abc import GitHub
from project_pull_mover.core.notifier import Notifier
from project_pull_mover.core.pull_request import PullRequestSnapshot
from project_pull_mover.core.summary import NOTHING_CHANGED_MESSAGE, format_run_summary
from project_pull_mover.core.user_feedback import UserFeedback

logger = logging.getLogger(__name__)


class PullRequestMover:
    """Moves every pull request in a project to the status column it belongs in.

    Fetching is sequential and fails fast. Per-pull-request work is
    independent, so with jobs > 1 it runs on a thread pool; each worker
    returns its own RunTotals and the results are merged afterwards.
    """

    def __init__(
        self,
        github: GitHub,
        notifier: Notifier,
        config: MoverConfig,
        feedback: UserFeedback,
    ) -> None:
        self._github = github
        self._notifier = notifier
        self._config = config
        self._feedback = feedback

    def run(self) -> RunTotals:
        """Execute one full pass over the project.

        Returns:
            Aggregated change counts for the run

        Raises:
            PullMoverError: If project or pull request data cannot be loaded
            RuntimeError: If a gh command fails
        """
        loaded = DataLoader(self._github, self._config, self._feedback).load()
        if not loaded.project_has_pull_requests:
            return RunTotals()

        engine = StatusDecisionEngine(
            loaded.registry,
            allow_marking_drafts=self._config.allow_marking_drafts,
            failing_test_label=self._config.failing_test_label,
        )
        executor = ChangeExecutor(
            self._github,
            loaded.registry,
            self._feedback,
            build_names_for_rerun=self._config.build_names_for_rerun,
        )

        def process(pull: PullRequestSnapshot) -> RunTotals:
            outcome = engine.decide(pull)
            logger.debug("Decision for %s: %s", pull, outcome)
            return executor.apply(pull, outcome)

        pulls = loaded.pull_requests
        if self._config.jobs > 1 and len(pulls) > 1:
            with ThreadPoolExecutor(max_workers=self._config.jobs) as pool:
                partials = list(pool.map(process, pulls))
        else:
            partials = [process(pull) for pull in pulls]

        totals = RunTotals()
        for partial in partials:
            totals = totals.merge(partial)

        summary = format_run_summary(totals)
        if summary is None:
            self._feedback.info(NOTHING_CHANGED_MESSAGE)
        else:
            self._feedback.success(summary)
            self._notifier.notify(loaded.project_title, summary)
        return totals
