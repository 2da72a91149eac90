"""
Products module exceptions.
"""

from shared.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    ValidationError,
)
from shared.validation import FieldError, errors_to_details, join_messages


class ProductNotFoundError(NotFoundError):
    """Raised when a product is not found."""

    def __init__(self, product_id: str):
        super().__init__(
            "Product not found",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class InvalidProductIdError(InvalidArgumentError):
    """Raised when a product id is not a well-formed ObjectId."""

    def __init__(self, product_id: str):
        super().__init__(
            "Invalid product ID",
            code="INVALID_PRODUCT_ID",
            details={"product_id": product_id},
        )


class DuplicateSkuError(ConflictError):
    """Raised when a product's SKU is already used by another product."""

    def __init__(self, sku: str):
        super().__init__(
            "SKU already exists",
            code="DUPLICATE_SKU",
            details={"sku": sku},
        )


class ProductValidationError(ValidationError):
    """Raised when product fields violate their constraints."""

    def __init__(self, errors: list[FieldError]):
        super().__init__(
            join_messages(errors),
            code="VALIDATION_FAILED",
            details=errors_to_details(errors),
        )
