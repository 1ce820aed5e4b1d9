"""Application context with dependency injection."""

from dataclasses import dataclass

from project_pull_mover.core.config import MoverConfig
from project_pull_mover.core.github.abc import GitHub
from project_pull_mover.core.github.dry_run import DryRunGitHub
from project_pull_mover.core.github.real import RealGitHub
from project_pull_mover.core.notifier import Notifier, RealNotifier


@dataclass(frozen=True)
class MoverContext:
    """Immutable context holding the external collaborators of a run.

    Created at the CLI entry point. Tests construct it directly with fakes
    and pass it as `obj` to the click runner.
    """

    github: GitHub
    notifier: Notifier


def create_context(config: MoverConfig) -> MoverContext:
    """Create production context with real implementations.

    Args:
        config: Validated run configuration

    Returns:
        MoverContext with real implementations; the GitHub client is wrapped
        in DryRunGitHub when config.dry_run is set
    """
    github: GitHub = RealGitHub(config.gh_path)
    if config.dry_run:
        github = DryRunGitHub(github)
    return MoverContext(github=github, notifier=RealNotifier())
