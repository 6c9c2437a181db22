"""
User-facing notification channels.

The engine reports every counterpart mutation through a notifier. Notices
are fire-and-forget: a failing channel must never fail reconciliation.
"""

from typing import Protocol

from shared.log import create_logger

_, _, log_info, _, _ = create_logger("Notice")


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


class LogNotifier:
    """Write notices to the plugin log."""

    def notify(self, message: str) -> None:
        log_info(message)


class MessageCollector:
    """Collect notices in memory so the host can display them after the save.

    The plugin script returns collected messages in its JSON output.
    """

    def __init__(self):
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)

    def drain(self) -> list[str]:
        """Return collected messages and reset the buffer."""
        messages, self.messages = self.messages, []
        return messages


class NullNotifier:
    """Discard notices (used when notices are disabled in config)."""

    def notify(self, message: str) -> None:
        pass
