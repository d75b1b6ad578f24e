"""Notification log entries.

Nothing is actually delivered; each event a customer would be told about
is recorded so it can be audited and shown back to them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class NotificationType(Enum):
    EMAIL = "email"
    SMS = "sms"


class NotificationStatus(Enum):
    SENT = "sent"
    FAILED = "failed"
    PENDING = "pending"


@dataclass(frozen=True)
class NotificationLog:
    id: str
    recipient: str
    subject: str
    status: NotificationStatus
    type: NotificationType = NotificationType.EMAIL
    order_number: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
