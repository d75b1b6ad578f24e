"""Document-store-backed implementation of NotificationLogRepository."""

from __future__ import annotations

from datetime import datetime

from storefront.domain.model.notification import (
    NotificationLog,
    NotificationStatus,
    NotificationType,
)
from storefront.domain.repository.notification_repository import (
    NotificationLogRepository,
)
from storefront.infrastructure.persistence.document_store import Document, DocumentStore

COLLECTION = "notification_logs"


class DocumentNotificationLogRepository(NotificationLogRepository):

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def add(self, entry: NotificationLog) -> None:
        self._store.insert_one(COLLECTION, self._to_raw(entry))

    def find_by_recipients(self, recipients: list[str]) -> list[NotificationLog]:
        wanted = set(recipients)
        docs = self._store.find(COLLECTION, lambda doc: doc["recipient"] in wanted)
        entries = [self._to_domain(raw) for raw in docs]
        return sorted(entries, key=lambda e: e.timestamp, reverse=True)

    @staticmethod
    def _to_raw(entry: NotificationLog) -> Document:
        return {
            "id": entry.id,
            "type": entry.type.value,
            "recipient": entry.recipient,
            "subject": entry.subject,
            "timestamp": entry.timestamp.isoformat(),
            "status": entry.status.value,
            "order_number": entry.order_number,
        }

    @staticmethod
    def _to_domain(raw: Document) -> NotificationLog:
        return NotificationLog(
            id=raw["id"],
            type=NotificationType(raw["type"]),
            recipient=raw["recipient"],
            subject=raw["subject"],
            timestamp=datetime.fromisoformat(raw["timestamp"]),
            status=NotificationStatus(raw["status"]),
            order_number=raw.get("order_number"),
        )
