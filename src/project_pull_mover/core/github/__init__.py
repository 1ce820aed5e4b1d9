"""GitHub operations subpackage.

Provides an abstraction over the gh CLI with a real implementation and a
dry-run wrapper; tests substitute an in-memory fake.
"""

from project_pull_mover.core.github.abc import GitHub
from project_pull_mover.core.github.dry_run import DryRunGitHub
from project_pull_mover.core.github.real import RealGitHub
from project_pull_mover.core.github.types import AuthorPullRequest, ProjectItem, RequiredCheck

__all__ = [
    "GitHub",
    "RealGitHub",
    "DryRunGitHub",
    "ProjectItem",
    "AuthorPullRequest",
    "RequiredCheck",
]
