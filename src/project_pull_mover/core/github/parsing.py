"""Parsing utilities for gh CLI output."""

import json
import re
from typing import Any

from project_pull_mover.core.errors import GhOutputParseError, GraphQLApiError
from project_pull_mover.core.github.types import AuthorPullRequest, ProjectItem, RequiredCheck

_RUN_ID_PATTERN = re.compile(r"/actions/runs/(\d+)/job/")


def decode_gh_output(raw: bytes) -> str:
    """Decode raw gh output as UTF-8.

    gh always emits UTF-8, but the process locale may claim otherwise, so the
    bytes are decoded explicitly instead of trusting the default encoding.

    Raises:
        GhOutputParseError: If the bytes are not valid UTF-8
    """
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        msg = f"gh output is not valid UTF-8: {e}"
        raise GhOutputParseError(msg) from e


def parse_json_output(text: str) -> Any:
    """Parse JSON text from gh, raising GhOutputParseError on malformed input."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON from gh: {e}"
        raise GhOutputParseError(msg) from e


def parse_project_items(data: dict[str, Any]) -> list[ProjectItem]:
    """Parse `gh project item-list --format json` output into ProjectItems."""
    items: list[ProjectItem] = []
    for raw_item in data.get("items") or []:
        content = raw_item.get("content") or {}
        items.append(
            ProjectItem(
                item_type=content.get("type", ""),
                number=content.get("number"),
                repo_name_with_owner=content.get("repository"),
                labels=tuple(raw_item.get("labels") or ()),
            )
        )
    return items


def parse_author_pull_requests(data: list[dict[str, Any]]) -> list[AuthorPullRequest]:
    """Parse `gh search prs --json number,repository` output."""
    return [
        AuthorPullRequest(
            number=entry["number"],
            repo_name_with_owner=entry["repository"]["nameWithOwner"],
        )
        for entry in data
    ]


def parse_required_checks(data: list[dict[str, Any]]) -> list[RequiredCheck]:
    """Parse `gh pr checks --required --json link,state,name` output."""
    return [
        RequiredCheck(
            name=entry.get("name", ""),
            link=entry.get("link", ""),
            state=entry.get("state", ""),
        )
        for entry in data
    ]


def parse_graphql_response(response: Any) -> dict[str, Any]:
    """Extract the data payload from a GraphQL response.

    Partial responses that carry both data and errors are accepted; only a
    missing data payload is treated as a failure.

    Raises:
        GraphQLApiError: With every error message when no data is present
    """
    if isinstance(response, dict) and response.get("data") is not None:
        return response["data"]

    messages: list[str] = []
    if isinstance(response, dict):
        messages = [error.get("message", "") for error in response.get("errors") or []]
    if not messages:
        messages = [f"Error: no data returned from the GraphQL API: {response!r}"]
    else:
        messages[0] = f"Error: no data returned from the GraphQL API: {messages[0]}"
    raise GraphQLApiError(messages)


def parse_run_id_from_check_link(link: str) -> str | None:
    """Extract the Actions run ID from a check's details link.

    Example:
        >>> parse_run_id_from_check_link("https://github.com/o/r/actions/runs/42/job/7")
        '42'
    """
    match = _RUN_ID_PATTERN.search(link)
    if match is None:
        return None
    return match.group(1)
