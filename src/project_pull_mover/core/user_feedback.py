"""User-facing progress output with quiet-mode awareness."""

from abc import ABC, abstractmethod

import click

from project_pull_mover.cli.output import user_output

ERROR_PREFIX = "❌ "
LOADING_PREFIX = "⏳ "
SUCCESS_PREFIX = "✅ "
INFO_PREFIX = "ℹ️ "


class UserFeedback(ABC):
    """Provides user-facing progress output that's mode-aware.

    This abstraction eliminates the need to thread a 'quiet' boolean through
    every function signature. Callers report progress through these methods
    and the implementation decides what is actually shown.

    Two modes:
    - Interactive: Show everything (loading, info, success, errors)
    - Quiet: Suppress everything except errors
    """

    @abstractmethod
    def loading(self, message: str) -> None:
        """Announce a step that is about to run (suppressed in quiet mode)."""

    @abstractmethod
    def info(self, message: str) -> None:
        """Show informational message (suppressed in quiet mode)."""

    @abstractmethod
    def success(self, message: str) -> None:
        """Show success message (suppressed in quiet mode)."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Show error message (always shown, even in quiet mode)."""


class InteractiveFeedback(UserFeedback):
    """Feedback shown in interactive mode (all messages)."""

    def loading(self, message: str) -> None:
        user_output(f"{LOADING_PREFIX}{message}")

    def info(self, message: str) -> None:
        user_output(f"{INFO_PREFIX}{message}")

    def success(self, message: str) -> None:
        user_output(click.style(f"{SUCCESS_PREFIX}{message}", fg="green"))

    def error(self, message: str) -> None:
        user_output(click.style(f"{ERROR_PREFIX}{message}", fg="red"))


class QuietFeedback(UserFeedback):
    """Feedback for --quiet runs (only errors shown)."""

    def loading(self, message: str) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        user_output(click.style(f"{ERROR_PREFIX}{message}", fg="red"))


def create_feedback(quiet: bool) -> UserFeedback:
    if quiet:
        return QuietFeedback()
    return InteractiveFeedback()
