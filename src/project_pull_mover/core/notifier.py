"""Best-effort desktop notifications."""

import logging
import re
import shutil
import subprocess
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

_QUOTES = re.compile(r"[\"']")


class Notifier(ABC):
    """Sends a desktop notification summarizing a run."""

    @abstractmethod
    def notify(self, title: str, message: str) -> None:
        """Show a notification. Must never raise for a missing mechanism."""


class RealNotifier(Notifier):
    """Uses osascript on macOS or notify-send where available.

    When neither tool is on PATH the notification is silently skipped.
    """

    def notify(self, title: str, message: str) -> None:
        title = _QUOTES.sub("", title)
        message = _QUOTES.sub("", message)

        if shutil.which("osascript"):
            script = f'display notification "{message}" with title "{title}"'
            cmd = ["osascript", "-e", script]
        elif shutil.which("notify-send"):
            cmd = ["notify-send", title, message]
        else:
            logger.debug("No desktop notification mechanism available")
            return

        result = subprocess.run(cmd, capture_output=True, check=False)
        if result.returncode != 0:
            logger.warning("Desktop notification failed with exit code %d", result.returncode)
