"""Order number generation.

An order number is a short human-readable identifier: a fixed prefix,
the two-digit year and six characters of base-36 entropy, e.g.
``SS26K4Q9ZA``.  Generators only make collisions unlikely; the order
store's unique index is what guarantees uniqueness.
"""

from __future__ import annotations

import secrets
import string
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, timezone

ALPHABET = string.digits + string.ascii_uppercase
DEFAULT_PREFIX = "SS"
ENTROPY_LENGTH = 6


class OrderNumberGenerator(ABC):

    @abstractmethod
    def next_number(self) -> str:
        """Return a candidate order number."""


class RandomOrderNumberGenerator(OrderNumberGenerator):

    def __init__(
        self,
        prefix: str = DEFAULT_PREFIX,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._prefix = prefix
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def next_number(self) -> str:
        year = f"{self._clock().year % 100:02d}"
        entropy = "".join(secrets.choice(ALPHABET) for _ in range(ENTROPY_LENGTH))
        return f"{self._prefix}{year}{entropy}"
