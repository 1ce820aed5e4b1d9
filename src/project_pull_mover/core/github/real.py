"""Production implementation of GitHub operations."""

import logging
from typing import Any

from project_pull_mover.core.errors import GraphQLApiError, NoDataError
from project_pull_mover.core.github.abc import GitHub
from project_pull_mover.core.github.parsing import (
    decode_gh_output,
    parse_author_pull_requests,
    parse_graphql_response,
    parse_json_output,
    parse_project_items,
    parse_required_checks,
)
from project_pull_mover.core.github.types import AuthorPullRequest, ProjectItem, RequiredCheck
from project_pull_mover.core.subprocess_utils import run_subprocess_with_context

logger = logging.getLogger(__name__)


class RealGitHub(GitHub):
    """Production implementation using gh CLI.

    All GitHub operations execute actual gh commands via subprocess.
    """

    def __init__(self, gh_path: str = "gh") -> None:
        """Initialize RealGitHub.

        Args:
            gh_path: Path to the gh executable
        """
        self._gh_path = gh_path

    def _run(self, args: list[str], operation_context: str, *, check: bool = True) -> str:
        cmd = [self._gh_path, *args]
        logger.debug("Running: %s", " ".join(cmd))
        result = run_subprocess_with_context(cmd, operation_context=operation_context, check=check)
        return decode_gh_output(result.stdout)

    def list_project_items(self, project_number: int, owner: str, limit: int) -> list[ProjectItem]:
        args = [
            "project",
            "item-list",
            str(project_number),
            "--owner",
            owner,
            "--format",
            "json",
            "--limit",
            str(limit),
        ]
        stdout = self._run(args, f"list items in project {project_number}")
        if not stdout.strip():
            cmd_str = " ".join([self._gh_path, *args])
            msg = f"Error: no JSON results for project items; command: {cmd_str}"
            raise NoDataError(msg)
        return parse_project_items(parse_json_output(stdout))

    def run_graphql_query(self, query: str) -> dict[str, Any]:
        # gh exits non-zero when the response has errors; the body still
        # carries the messages we want to surface, so parse it regardless.
        cmd = [self._gh_path, "api", "graphql", "-f", f"query={query}"]
        logger.debug("Running: %s", " ".join(cmd))
        result = run_subprocess_with_context(
            cmd, operation_context="run GraphQL query", check=False
        )
        stdout = decode_gh_output(result.stdout)
        if not stdout.strip():
            # Transport failures (auth, network) only explain themselves on stderr
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            if stderr:
                raise GraphQLApiError(
                    [
                        "Error: no data returned from the GraphQL API: "
                        f"gh exited with code {result.returncode}",
                        stderr,
                    ]
                )
            return parse_graphql_response(None)
        return parse_graphql_response(parse_json_output(stdout))

    def set_project_item_status(
        self,
        *,
        project_item_id: str,
        project_global_id: str,
        status_field_id: str,
        option_id: str,
    ) -> None:
        self._run(
            [
                "project",
                "item-edit",
                "--id",
                project_item_id,
                "--project-id",
                project_global_id,
                "--field-id",
                status_field_id,
                "--single-select-option-id",
                option_id,
            ],
            f"set status of project item {project_item_id}",
        )

    def apply_label(self, pr_number: int, repo_name_with_owner: str, label_name: str) -> None:
        self._run(
            [
                "pr",
                "edit",
                str(pr_number),
                "--repo",
                repo_name_with_owner,
                "--add-label",
                label_name,
            ],
            f"apply label '{label_name}' to {repo_name_with_owner}#{pr_number}",
        )

    def remove_label(self, pr_number: int, repo_name_with_owner: str, label_name: str) -> None:
        self._run(
            [
                "pr",
                "edit",
                str(pr_number),
                "--repo",
                repo_name_with_owner,
                "--remove-label",
                label_name,
            ],
            f"remove label '{label_name}' from {repo_name_with_owner}#{pr_number}",
        )

    def mark_as_draft(self, pr_number: int, repo_name_with_owner: str) -> None:
        self._run(
            ["pr", "ready", "--undo", str(pr_number), "--repo", repo_name_with_owner],
            f"mark {repo_name_with_owner}#{pr_number} as a draft",
        )

    def rerun_failed_run(self, run_id: str, repo_name_with_owner: str) -> None:
        self._run(
            ["run", "rerun", run_id, "--failed", "--repo", repo_name_with_owner],
            f"rerun failed run {run_id} in {repo_name_with_owner}",
        )

    def get_failing_required_checks(
        self, pr_number: int, repo_name_with_owner: str
    ) -> list[RequiredCheck]:
        """Get failing required checks via `gh pr checks`.

        gh exits non-zero whenever a check is failing or pending, which is
        exactly the case we care about, so the exit code is ignored and the
        JSON body is parsed instead.
        """
        stdout = self._run(
            [
                "pr",
                "checks",
                str(pr_number),
                "--repo",
                repo_name_with_owner,
                "--required",
                "--json",
                "link,state,name",
            ],
            f"list required checks for {repo_name_with_owner}#{pr_number}",
            check=False,
        )
        if not stdout.strip():
            return []
        checks = parse_required_checks(parse_json_output(stdout))
        return [check for check in checks if check.state == "FAILURE"]

    def search_open_pull_requests_by_author(
        self, author: str, project_owner: str, project_number: int, limit: int
    ) -> list[AuthorPullRequest]:
        args = [
            "search",
            "prs",
            "--author",
            author,
            "--project",
            f"{project_owner}/{project_number}",
            "--json",
            "number,repository",
            "--limit",
            str(limit),
            "--state",
            "open",
        ]
        stdout = self._run(args, f"search pull requests by @{author}")
        if not stdout.strip():
            cmd_str = " ".join([self._gh_path, *args])
            msg = (
                "Error: no JSON results for pull requests by author in project; "
                f"command: {cmd_str}"
            )
            raise NoDataError(msg)
        return parse_author_pull_requests(parse_json_output(stdout))

    def get_auth_status(self) -> str:
        # gh writes its auth report to stderr
        result = run_subprocess_with_context(
            [self._gh_path, "auth", "status"],
            operation_context="check GitHub authentication status",
            check=False,
        )
        output = decode_gh_output(result.stdout) + decode_gh_output(result.stderr)
        return output.strip()
