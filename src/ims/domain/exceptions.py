"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and map each kind to a
distinct user-facing outcome.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    retryable = False


class ValidationError(DomainException):
    """Input was malformed or a business rule was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(DomainException):
    """A sale asked for more units than the product has in stock."""

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product '{product_id}' "
            f"(need {requested}, have {available})"
        )


class TransactionAbortedError(DomainException):
    """The atomic unit could not commit.

    Nothing was written. The whole call may be resubmitted unchanged.
    """

    retryable = True
