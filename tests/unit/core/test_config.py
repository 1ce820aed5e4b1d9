"""Tests for building and validating the run configuration."""

from typing import Any

import pytest

from project_pull_mover.core.config import MoverConfig, build_config, split_list_values
from project_pull_mover.core.errors import ConfigError


def _build(**overrides: Any) -> MoverConfig:
    values: dict[str, Any] = {
        "project_number": 3,
        "project_owner": "octo-org",
        "project_owner_type": "organization",
        "status_field": "Status",
        "in_progress_option_id": "opt-1",
        "gh_path": "/usr/bin/gh",
    }
    values.update(overrides)
    return build_config(**values)


@pytest.mark.parametrize(
    "overrides",
    [{"project_number": None}, {"project_owner": None}, {"status_field": "  "}],
)
def test_missing_required_options(overrides: dict[str, Any]) -> None:
    with pytest.raises(ConfigError, match="missing required options"):
        _build(**overrides)


@pytest.mark.parametrize("owner_type", [None, "team", "Organization"])
def test_invalid_project_owner_type(owner_type: str | None) -> None:
    with pytest.raises(ConfigError, match="invalid project owner type"):
        _build(project_owner_type=owner_type)


def test_missing_required_options_reported_before_owner_type() -> None:
    with pytest.raises(ConfigError, match="missing required options"):
        _build(project_owner=None, project_owner_type="team")


def test_at_least_one_option_id_required() -> None:
    with pytest.raises(ConfigError, match="at least one option ID"):
        _build(in_progress_option_id=None)


@pytest.mark.parametrize(
    ("overrides", "message"),
    [({"pulls_per_query": 0}, "pulls per query"), ({"jobs": 0}, "jobs")],
)
def test_positive_limits(overrides: dict[str, Any], message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        _build(**overrides)


def test_normalizes_lists_and_optional_strings() -> None:
    config = _build(
        ignored_option_ids=("a,b", "c"),
        builds_to_rerun=(" CI / Test ,Lint", ""),
        failing_test_label="  ",
        author=" octocat ",
    )

    assert config.ignored_option_ids == ("a", "b", "c")
    assert config.build_names_for_rerun == ("ci / test", "lint")
    assert config.failing_test_label is None
    assert config.author == "octocat"
    assert config.gh_path == "/usr/bin/gh"


def test_blank_option_ids_count_as_unset() -> None:
    config = _build(needs_review_option_id="")

    assert config.needs_review_option_id is None
    assert config.in_progress_option_id == "opt-1"


def test_gh_path_defaults_to_path_lookup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("project_pull_mover.core.config.shutil.which", lambda name: None)

    assert _build(gh_path=None).gh_path == "gh"


def test_split_list_values_drops_blanks() -> None:
    assert split_list_values(("a, ,b", "")) == ("a", "b")
