"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the HTTP and CLI layers can catch them uniformly and map them to a
status code or a user-friendly message.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):
    """A product is missing from the catalog or is no longer active."""


class OrderNotFoundError(EntityNotFoundError):
    """An order id does not match any stored order."""


class InsufficientStockError(DomainException):
    """Requested quantity exceeds the stock left for a product."""


class AccessDeniedError(DomainException):
    """The principal may not act on this resource."""


class RefundAlreadyRequestedError(DomainException):
    """The order's refund status has already left NONE."""


class DuplicateOrderNumberError(DomainException):
    """The order store rejected an insert on its unique order-number index."""
