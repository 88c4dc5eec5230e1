"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

The families matter to callers deciding whether to retry:
- ValidationError: bad input, rejected before any write.
- EntityNotFoundError: a referenced customer/product/order does not exist.
- IllegalTransitionError: a state machine rule was violated; never retry.
- ConcurrencyConflictError: a concurrent writer won; safe to retry.
- PaymentProviderError: the external provider failed; retry at will.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidOrderError(ValidationError):
    """The order violates a construction invariant."""


class EmptyOrderError(InvalidOrderError):

    def __init__(self) -> None:
        super().__init__("Cannot complete order without items")


class MalformedWebhookError(ValidationError):
    """The webhook payload is missing required fields or has an unknown type."""


class MissingExternalReferenceError(ValidationError):
    """The provider record does not point at any order."""


class InvalidSignatureError(ValidationError):

    def __init__(self) -> None:
        super().__init__("Invalid webhook signature")


class DuplicateCustomerError(ValidationError):
    """A customer with the same tax id or email already exists."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    entity = "Entity"

    def __init__(self, entity_id: str | None = None) -> None:
        self.entity_id = entity_id
        if entity_id is None:
            super().__init__(f"{self.entity} not found")
        else:
            super().__init__(f"{self.entity} '{entity_id}' not found")


class CustomerNotFoundError(EntityNotFoundError):
    entity = "Customer"


class ProductNotFoundError(EntityNotFoundError):
    entity = "Product"


class OrderNotFoundError(EntityNotFoundError):
    entity = "Order"


class QueueEntryNotFoundError(EntityNotFoundError):
    entity = "Queue entry for order"


class IllegalTransitionError(DomainException):
    """A state machine rejected the requested successor state."""

    kind = "status"

    def __init__(self, current, requested) -> None:
        self.current = current
        self.requested = requested
        super().__init__(
            f"Invalid {self.kind} transition from {current.value} to {requested.value}"
        )


class IllegalStatusTransitionError(IllegalTransitionError):
    kind = "status"


class IllegalPaymentTransitionError(IllegalTransitionError):
    kind = "payment status"


class WorkflowRuleViolation(DomainException):
    """A cross-aggregate workflow policy forbids the operation."""


class PaymentNotApprovedError(WorkflowRuleViolation):

    def __init__(self, order_id: str, payment_status) -> None:
        self.order_id = order_id
        self.payment_status = payment_status
        super().__init__(
            f"Order '{order_id}' cannot enter preparation: payment is "
            f"{payment_status.value}, expected APPROVED"
        )


class ConcurrencyConflictError(DomainException):
    """Another writer changed the record first. Reload and retry."""

    def __init__(self, order_id: str, expected: int, actual: int) -> None:
        self.order_id = order_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Order '{order_id}' was modified concurrently "
            f"(expected version {expected}, found {actual})"
        )


class PaymentProviderError(DomainException):
    """The payment provider could not be reached or answered with an error."""
