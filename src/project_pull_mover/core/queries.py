"""GraphQL query construction for project and pull request data."""

import json
import re

from project_pull_mover.core.github.types import ProjectItem
from project_pull_mover.core.pull_request import split_repo_name_with_owner

_INVALID_NAME_CHARS = re.compile(r"[^_0-9A-Za-z]")

# Only unsuccessful check runs are fetched; any required one is a failing build
_FAILED_CONCLUSIONS = "ACTION_REQUIRED, TIMED_OUT, CANCELLED, FAILURE, STARTUP_FAILURE"


def replace_hyphens(value: str) -> str:
    """Capitalize each hyphen-separated piece and join them.

    Example:
        >>> replace_hyphens("foo-bar")
        'FooBar'
    """
    return "".join(piece.capitalize() for piece in value.split("-"))


def _graphql_string(value: str) -> str:
    # JSON string literals are valid GraphQL string literals
    return json.dumps(value)


def pull_field_alias(owner: str, repo_name: str, number: int) -> str:
    """Unique GraphQL alias for one pull request, e.g. `pullOctoOrgSomeRepo12`."""
    alias = f"pull{replace_hyphens(owner)}{replace_hyphens(repo_name)}{number}"
    return _INVALID_NAME_CHARS.sub("_", alias)


def alias_for_item(item: ProjectItem) -> str:
    owner, name, number = split_repo_name_with_owner(item)
    return pull_field_alias(owner, name, number)


def assign_aliases(items: list[ProjectItem]) -> list[str]:
    """Alias each item, suffixing `_2`, `_3`... where two items would collide.

    Different pull requests can flatten to the same alias, e.g. `octo/b1#2` and
    `octo/b#12` both give `pullOctoB12`.

    Returns:
        One alias per item, in item order, all distinct
    """
    taken: set[str] = set()
    aliases: list[str] = []
    for item in items:
        base = alias_for_item(item)
        alias = base
        suffix = 2
        while alias in taken:
            alias = f"{base}_{suffix}"
            suffix += 1
        taken.add(alias)
        aliases.append(alias)
    return aliases


def pull_request_field(item: ProjectItem, status_field: str, alias: str | None = None) -> str:
    """Build the aliased `repository { pullRequest { ... } }` field for one item.

    Args:
        item: Project item for the pull request
        status_field: Name of the project's status field
        alias: Field alias; defaults to alias_for_item(item)

    Raises:
        MissingPullRequestDataError: If the item lacks repository or number
    """
    owner, name, number = split_repo_name_with_owner(item)
    if alias is None:
        alias = pull_field_alias(owner, name, number)
    return f"""{alias}: repository(owner: {_graphql_string(owner)}, name: {_graphql_string(name)}) {{
  id
  defaultBranchRef {{ name }}
  pullRequest(number: {number}) {{
    isDraft
    isInMergeQueue
    reviewDecision
    mergeable
    baseRefName
    commits(last: 1) {{
      nodes {{
        commit {{
          checkSuites(first: 100) {{
            nodes {{
              checkRuns(
                first: 100
                filterBy: {{checkType: LATEST, conclusions: [{_FAILED_CONCLUSIONS}]}}
              ) {{
                nodes {{
                  name
                  isRequired(pullRequestNumber: {number})
                }}
              }}
            }}
          }}
          status {{
            contexts {{
              context
              state
              isRequired(pullRequestNumber: {number})
            }}
          }}
        }}
      }}
    }}
    projectItems(first: 100) {{
      nodes {{
        id
        project {{ id number }}
        fieldValueByName(name: {_graphql_string(status_field)}) {{
          ... on ProjectV2ItemFieldSingleSelectValue {{
            field {{ ... on ProjectV2SingleSelectField {{ id }} }}
            optionId
            name
          }}
        }}
      }}
    }}
  }}
}}"""


def owner_field(owner_type: str, owner: str, project_number: int, status_field: str) -> str:
    """Build the `user`/`organization` field that loads the project's status options."""
    return f"""{owner_type}(login: {_graphql_string(owner)}) {{
  projectV2(number: {project_number}) {{
    title
    field(name: {_graphql_string(status_field)}) {{
      ... on ProjectV2SingleSelectField {{
        id
        options {{ id name }}
      }}
    }}
  }}
}}"""


def build_batched_queries(
    owner_field_text: str, pull_fields: list[str], pulls_per_query: int
) -> list[str]:
    """Group pull request fields into queries of at most `pulls_per_query` fields.

    The first query also carries the owner field, so at least one query is
    always returned.
    """
    batches = [
        pull_fields[start : start + pulls_per_query]
        for start in range(0, len(pull_fields), pulls_per_query)
    ] or [[]]

    queries = []
    for index, batch in enumerate(batches):
        fields = [owner_field_text, *batch] if index == 0 else batch
        body = "\n".join(fields)
        queries.append(f"query {{\n{body}\n}}")
    return queries
