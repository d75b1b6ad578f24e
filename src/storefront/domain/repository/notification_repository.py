"""Abstract repository for notification log entries."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.notification import NotificationLog


class NotificationLogRepository(ABC):

    @abstractmethod
    def add(self, entry: NotificationLog) -> None:
        """Append a log entry."""

    @abstractmethod
    def find_by_recipients(self, recipients: list[str]) -> list[NotificationLog]:
        """Return entries for any of *recipients*, newest first."""
