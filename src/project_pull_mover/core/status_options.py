"""Registry of the project's status options.

Maps the logical statuses this tool understands onto the opaque option IDs
and display names of the project's single-select status field.
"""

from dataclasses import dataclass, field
from enum import Enum

from project_pull_mover.core.config import MoverConfig
from project_pull_mover.core.github.graphql_models import ProjectData


class LogicalStatus(Enum):
    """Status columns the decision engine can target, in registry order."""

    IN_PROGRESS = "in_progress"
    NOT_AGAINST_MAIN = "not_against_main"
    NEEDS_REVIEW = "needs_review"
    READY_TO_DEPLOY = "ready_to_deploy"
    CONFLICTING = "conflicting"


DEFAULT_OPTION_NAMES: dict[LogicalStatus, str] = {
    LogicalStatus.IN_PROGRESS: "In progress",
    LogicalStatus.NOT_AGAINST_MAIN: "Not against main",
    LogicalStatus.NEEDS_REVIEW: "Needs review",
    LogicalStatus.READY_TO_DEPLOY: "Ready to deploy",
    LogicalStatus.CONFLICTING: "Conflicting",
}

DEFAULT_IGNORED_OPTION_NAME = "Ignored"


@dataclass(frozen=True)
class StatusOption:
    option_id: str
    name: str


@dataclass(frozen=True)
class StatusOptionRegistry:
    """Configured status options for one run.

    Built once after the first GraphQL response and shared read-only by every
    pull request evaluation. Statuses absent from `options` are not
    configured and must never be targeted.
    """

    status_field_name: str
    status_field_id: str | None = None
    options: dict[LogicalStatus, StatusOption] = field(default_factory=dict)
    ignored_option_ids: frozenset[str] = frozenset()
    ignored_option_names: tuple[str, ...] = (DEFAULT_IGNORED_OPTION_NAME,)

    @classmethod
    def from_config(
        cls, config: MoverConfig, project_data: ProjectData | None
    ) -> "StatusOptionRegistry":
        """Resolve configured option IDs to names using the project's field options.

        Args:
            config: Validated run configuration
            project_data: The owner's projectV2 payload, or None if unavailable

        Returns:
            Registry whose names come from the project where known and from
            the built-in defaults otherwise
        """
        names_by_id: dict[str, str] = {}
        status_field_id = None
        if project_data is not None and project_data.field is not None:
            names_by_id = {option.id: option.name for option in project_data.field.options}
            status_field_id = project_data.field.id

        configured_ids = {
            LogicalStatus.IN_PROGRESS: config.in_progress_option_id,
            LogicalStatus.NOT_AGAINST_MAIN: config.not_against_main_option_id,
            LogicalStatus.NEEDS_REVIEW: config.needs_review_option_id,
            LogicalStatus.READY_TO_DEPLOY: config.ready_to_deploy_option_id,
            LogicalStatus.CONFLICTING: config.conflicting_option_id,
        }
        options: dict[LogicalStatus, StatusOption] = {}
        for status, option_id in configured_ids.items():
            if option_id:
                name = names_by_id.get(option_id, DEFAULT_OPTION_NAMES[status])
                options[status] = StatusOption(option_id=option_id, name=name)

        ignored_names = tuple(
            names_by_id[option_id]
            for option_id in config.ignored_option_ids
            if option_id in names_by_id
        )
        return cls(
            status_field_name=config.status_field,
            status_field_id=status_field_id,
            options=options,
            ignored_option_ids=frozenset(config.ignored_option_ids),
            ignored_option_names=ignored_names or (DEFAULT_IGNORED_OPTION_NAME,),
        )

    def is_enabled(self, status: LogicalStatus) -> bool:
        return status in self.options

    def option_for(self, status: LogicalStatus) -> StatusOption | None:
        return self.options.get(status)

    def option_id(self, status: LogicalStatus) -> str | None:
        option = self.options.get(status)
        return option.option_id if option is not None else None

    def option_name(self, status: LogicalStatus) -> str:
        option = self.options.get(status)
        return option.name if option is not None else DEFAULT_OPTION_NAMES[status]

    def has_status(self, current_option_id: str | None, status: LogicalStatus) -> bool:
        """Whether a current option ID is the configured option for a status.

        An unconfigured status never matches, even when the pull request has
        no current option either.
        """
        configured = self.option_id(status)
        return configured is not None and current_option_id == configured

    def is_ignored(self, current_option_id: str | None) -> bool:
        return current_option_id is not None and current_option_id in self.ignored_option_ids

    @property
    def enabled_option_names(self) -> list[str]:
        return [self.options[status].name for status in LogicalStatus if status in self.options]
