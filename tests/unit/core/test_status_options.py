"""Tests for StatusOptionRegistry."""

from project_pull_mover.core.github.graphql_models import ProjectData, ProjectOwnerData
from project_pull_mover.core.status_options import LogicalStatus, StatusOptionRegistry
from tests.test_utils.builders import (
    IGNORED_ID,
    IN_PROGRESS_ID,
    NEEDS_REVIEW_ID,
    STATUS_FIELD_ID,
    make_config,
    owner_payload,
)


def _project_data(title: str = "Team board") -> ProjectData | None:
    return ProjectOwnerData.model_validate(owner_payload(title)).project_v2


def test_from_config_resolves_names_and_field_id_from_project() -> None:
    payload = owner_payload()
    payload["projectV2"]["field"]["options"][0]["name"] = "Doing"
    project_data = ProjectOwnerData.model_validate(payload).project_v2

    registry = StatusOptionRegistry.from_config(make_config(), project_data)

    assert registry.status_field_name == "Status"
    assert registry.status_field_id == STATUS_FIELD_ID
    assert registry.option_name(LogicalStatus.IN_PROGRESS) == "Doing"
    assert registry.ignored_option_names == ("On hold",)
    assert registry.ignored_option_ids == frozenset({IGNORED_ID})


def test_from_config_skips_unconfigured_statuses() -> None:
    config = make_config(
        not_against_main_option_id=None,
        ready_to_deploy_option_id=None,
        conflicting_option_id=None,
    )

    registry = StatusOptionRegistry.from_config(config, _project_data())

    assert registry.is_enabled(LogicalStatus.IN_PROGRESS)
    assert not registry.is_enabled(LogicalStatus.CONFLICTING)
    assert registry.option_for(LogicalStatus.CONFLICTING) is None
    assert registry.enabled_option_names == ["In progress", "Needs review"]


def test_from_config_without_project_data_uses_default_names() -> None:
    config = make_config(ignored_option_ids=("unknown-id",))

    registry = StatusOptionRegistry.from_config(config, None)

    assert registry.status_field_id is None
    assert registry.option_name(LogicalStatus.NEEDS_REVIEW) == "Needs review"
    assert registry.ignored_option_names == ("Ignored",)


def test_has_status_matches_configured_option_only() -> None:
    registry = StatusOptionRegistry.from_config(
        make_config(conflicting_option_id=None), _project_data()
    )

    assert registry.has_status(IN_PROGRESS_ID, LogicalStatus.IN_PROGRESS)
    assert not registry.has_status(NEEDS_REVIEW_ID, LogicalStatus.IN_PROGRESS)
    assert not registry.has_status(None, LogicalStatus.IN_PROGRESS)
    # Unconfigured status never matches, even a pull request with no status
    assert not registry.has_status(None, LogicalStatus.CONFLICTING)


def test_is_ignored() -> None:
    registry = StatusOptionRegistry.from_config(make_config(), None)

    assert registry.is_ignored(IGNORED_ID)
    assert not registry.is_ignored(IN_PROGRESS_ID)
    assert not registry.is_ignored(None)
