"""Fake Notifier for testing."""

from project_pull_mover.core.notifier import Notifier


class FakeNotifier(Notifier):
    """Records notifications instead of showing them."""

    def __init__(self) -> None:
        self._notifications: list[tuple[str, str]] = []

    @property
    def notifications(self) -> list[tuple[str, str]]:
        """List of (title, message) tuples in send order."""
        return self._notifications

    def notify(self, title: str, message: str) -> None:
        self._notifications.append((title, message))
