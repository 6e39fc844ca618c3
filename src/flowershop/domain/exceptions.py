"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each class carries an HTTP-style ``status_code`` describing how a caller
should treat the failure.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    status_code = 400


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class ItemUnavailable(ValidationError):
    """A flower is missing from the catalog or has been deactivated."""

    def __init__(self, flower_id: int) -> None:
        super().__init__(f"Flower {flower_id} unavailable")
        self.flower_id = flower_id


class InsufficientStock(ValidationError):
    """More units were requested than the flower has in stock."""

    def __init__(self, flower_id: int, available: int, requested: int) -> None:
        super().__init__(
            f"Insufficient stock for flower {flower_id} "
            f"(requested {requested}, {available} available)"
        )
        self.flower_id = flower_id
        self.available = available
        self.requested = requested


class NegativeStockRejected(ValidationError):
    """A stock adjustment would leave a flower with negative stock."""

    def __init__(self, flower_id: int, current: int, delta: int) -> None:
        super().__init__(
            f"Resulting stock cannot be negative "
            f"(flower {flower_id} has {current}, delta {delta})"
        )
        self.flower_id = flower_id
        self.current = current
        self.delta = delta


class ProfileResolutionError(ValidationError):
    """The principal cannot be mapped to a customer profile."""


class AuthorizationError(DomainException):
    """The principal's role does not allow the operation."""

    status_code = 403


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    status_code = 404


class TransientFailure(DomainException):
    """Lock contention, timeout or lost connection. Safe to retry."""

    status_code = 503
