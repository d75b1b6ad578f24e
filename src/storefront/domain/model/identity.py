"""Authenticated principals and role checks.

Identity is issued elsewhere (registration and login are not part of this
service); here it is just the data a request carries once its token has
been verified.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import AccessDeniedError


class Role(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"
    BRAND_PARTNER = "brand-partner"


@dataclass(frozen=True)
class Principal:
    user_id: str
    email: str
    role: Role = Role.CUSTOMER

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def authorize(principal: Principal, required_roles: Iterable[Role]) -> Principal:
    """Return *principal* if its role is one of *required_roles*.

    An empty *required_roles* means any authenticated principal is allowed.
    """
    allowed = frozenset(required_roles)
    if allowed and principal.role not in allowed:
        raise AccessDeniedError("Access denied")
    return principal
