"""User-facing alerts and confirmations."""

import logging
from dataclasses import dataclass
from typing import Protocol

_logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Interface for surfacing messages to the user."""

    async def alert(self, title: str, message: str) -> None:
        """Show a dismissible alert."""

    async def confirm(self, title: str, message: str) -> bool:
        """Ask the user to confirm a destructive action."""


@dataclass
class LoggingNotifier(Notifier):
    """Notifier for headless use: alerts are logged, confirmations answered
    with a fixed value."""

    auto_confirm: bool = False

    async def alert(self, title: str, message: str) -> None:
        """Log the alert."""
        _logger.info("%s: %s", title, message)

    async def confirm(self, title: str, message: str) -> bool:
        """Log the question and return the configured answer."""
        _logger.info("Confirm %s: %s -> %s", title, message, self.auto_confirm)
        return self.auto_confirm
