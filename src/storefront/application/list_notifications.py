"""Application service: notification log query."""

from __future__ import annotations

from storefront.application.dto import NotificationLogDTO
from storefront.domain.exceptions import AccessDeniedError
from storefront.domain.model.identity import Principal
from storefront.domain.repository.notification_repository import (
    NotificationLogRepository,
)


class ListNotificationLogsHandler:

    def __init__(self, log_repo: NotificationLogRepository) -> None:
        self._log_repo = log_repo

    def handle(self, principal: Principal, recipient: str | None = None) -> list[NotificationLogDTO]:
        """Entries sent to the principal, or to *recipient*.

        Only admins may look at another recipient's entries.
        """
        if recipient and recipient != principal.email and not principal.is_admin:
            raise AccessDeniedError("Access denied")

        recipients = [recipient] if recipient else [principal.email]
        return [NotificationLogDTO.from_entry(e) for e in self._log_repo.find_by_recipients(recipients)]
