from abc import ABC, abstractmethod

import structlog

logger = structlog.get_logger(__name__)


class BaseNotifier(ABC):
    """Blocking, user-visible notification (alert dialog on the device)."""

    @abstractmethod
    def alert(self, title: str, message: str) -> None:
        """Shows `message` and returns once the user has acknowledged it."""
        ...


class LogNotifier(BaseNotifier):
    """Headless notifier: alerts go to the log instead of a dialog."""

    def alert(self, title: str, message: str) -> None:
        logger.warning("user.alert", title=title, message=message)
