"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and display user-friendly
messages.  Each class carries the HTTP status it maps to.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    status_code = 400


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EmptyCartError(ValidationError):
    """Checkout was attempted on a cart with no items."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    status_code = 404


class AuthorizationError(DomainException):
    """The acting user does not own the resource."""

    status_code = 403


class ConflictError(DomainException):
    """The request conflicts with the current state of the store."""

    status_code = 409


class InsufficientStockError(ConflictError):
    """A product cannot supply the requested quantity."""

    status_code = 400

    def __init__(self, product_name: str) -> None:
        super().__init__(f"{product_name} is out of stock")
        self.product_name = product_name


class AlreadyReviewedError(ConflictError):
    """The user has already reviewed this product."""

    status_code = 400


class DuplicateCartLineError(ConflictError):
    """A cart already holds a line for this product."""


class ProductInUseError(ConflictError):
    """The product is referenced by purchase history."""


class DependencyFailure(Exception):
    """A best-effort collaborator (e.g. email delivery) failed.

    Never surfaced to callers of the core; logged by whoever invoked
    the collaborator.
    """
