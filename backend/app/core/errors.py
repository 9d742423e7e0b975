"""Domain errors raised by the product repository and service."""


class ProductError(Exception):
    """Base class for product domain failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProductNotFoundError(ProductError):
    """No product exists for the given id or SKU."""


class ProductConflictError(ProductError):
    """The SKU is already taken by another product."""


class ProductValidationError(ProductError):
    """A write failed for a reason that is not exposed to the caller."""
