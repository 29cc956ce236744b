"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and display
user-friendly messages.

Payment outcomes that are expected (duplicate deliveries, amount
mismatches, late payments) are *not* exceptions; they are values of
``PaymentResult`` returned by the reconciler.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):
    """No product matches the requested keyword for this vendor."""


class ProductInactiveError(ValidationError):
    """The product exists but is not open for reservations."""


class InsufficientStockError(ValidationError):
    """A reservation lost the race for the remaining units."""

    def __init__(self, product_name: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for {product_name} "
            f"(need {requested}, have {available} available)"
        )
        self.requested = requested
        self.available = available


class InvalidTransitionError(DomainException):
    """An order status change outside the state machine was attempted."""

    def __init__(self, order_id: int | None, current: str, target: str) -> None:
        super().__init__(
            f"Cannot move order #{order_id} from {current} to {target}"
        )
        self.order_id = order_id
        self.current = current
        self.target = target


class TokenCollisionError(DomainException):
    """A generated payment token is already assigned to another order."""


class InvalidSignatureError(DomainException):
    """A payment provider event failed authenticity verification."""


class ConfigurationError(DomainException):
    """The runtime configuration is invalid."""
