"""Pydantic models for the GraphQL responses this tool consumes.

Responses are validated through these models instead of being walked as
nested dicts, so a renamed or missing field fails fast with a ValidationError
rather than leaking a None into a boolean decision.
"""

from pydantic import BaseModel, ConfigDict, Field


class _GraphQLModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class CheckRunNode(_GraphQLModel):
    """A check run that concluded unsuccessfully on the last commit."""

    name: str
    is_required: bool = Field(alias="isRequired")


class CheckRunConnection(_GraphQLModel):
    nodes: list[CheckRunNode] = Field(default_factory=list)


class CheckSuiteNode(_GraphQLModel):
    check_runs: CheckRunConnection = Field(alias="checkRuns")


class CheckSuiteConnection(_GraphQLModel):
    nodes: list[CheckSuiteNode] = Field(default_factory=list)


class StatusContextNode(_GraphQLModel):
    """A legacy commit status context."""

    context: str
    state: str
    is_required: bool = Field(alias="isRequired")


class CommitStatus(_GraphQLModel):
    contexts: list[StatusContextNode] = Field(default_factory=list)


class CommitData(_GraphQLModel):
    check_suites: CheckSuiteConnection = Field(alias="checkSuites")
    status: CommitStatus | None = None


class CommitNode(_GraphQLModel):
    commit: CommitData


class CommitConnection(_GraphQLModel):
    nodes: list[CommitNode] = Field(default_factory=list)


class SingleSelectFieldRef(_GraphQLModel):
    id: str


class StatusFieldValue(_GraphQLModel):
    """Value of the status field on a project item.

    GitHub returns an empty object when the field is not single-select, so
    every attribute is optional.
    """

    field: SingleSelectFieldRef | None = None
    option_id: str | None = Field(default=None, alias="optionId")
    name: str | None = None


class ProjectRef(_GraphQLModel):
    id: str
    number: int


class ProjectItemNode(_GraphQLModel):
    id: str
    project: ProjectRef
    field_value_by_name: StatusFieldValue | None = Field(default=None, alias="fieldValueByName")


class ProjectItemConnection(_GraphQLModel):
    nodes: list[ProjectItemNode] = Field(default_factory=list)


class PullRequestData(_GraphQLModel):
    is_draft: bool = Field(alias="isDraft")
    is_in_merge_queue: bool = Field(alias="isInMergeQueue")
    review_decision: str | None = Field(default=None, alias="reviewDecision")
    mergeable: str
    base_ref_name: str = Field(alias="baseRefName")
    commits: CommitConnection
    project_items: ProjectItemConnection = Field(alias="projectItems")


class BranchRef(_GraphQLModel):
    name: str


class RepositoryData(_GraphQLModel):
    """One aliased `repository { pullRequest { ... } }` field."""

    id: str
    default_branch_ref: BranchRef | None = Field(default=None, alias="defaultBranchRef")
    pull_request: PullRequestData | None = Field(default=None, alias="pullRequest")


class StatusOptionData(_GraphQLModel):
    id: str
    name: str


class StatusFieldData(_GraphQLModel):
    id: str | None = None
    options: list[StatusOptionData] = Field(default_factory=list)


class ProjectData(_GraphQLModel):
    title: str
    field: StatusFieldData | None = None


class ProjectOwnerData(_GraphQLModel):
    """The `user` or `organization` field carrying the project definition."""

    project_v2: ProjectData | None = Field(default=None, alias="projectV2")
