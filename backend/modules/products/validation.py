"""
Product field validation and normalization.
"""

from typing import Any, Iterable, Optional

from shared.validation import FieldError
from .models import CATEGORY_VALUES

NAME_MIN_LENGTH = 2
DESCRIPTION_MAX_LENGTH = 500

PRODUCT_FIELDS = ("name", "quantity", "price", "category", "description", "sku")
STRING_FIELDS = ("name", "category", "description", "sku")


def normalize_product(data: dict[str, Any]) -> dict[str, Any]:
    """Trim string fields; everything else passes through."""
    normalized = dict(data)
    for field in STRING_FIELDS:
        value = normalized.get(field)
        if isinstance(value, str):
            normalized[field] = value.strip()
    return normalized


def _check_name(value: Any) -> Optional[str]:
    if value is None or value == "":
        return "Product name is required"
    if len(value) < NAME_MIN_LENGTH:
        return f"Product name must be at least {NAME_MIN_LENGTH} characters"
    return None


def _check_quantity(value: Any) -> Optional[str]:
    if value is None:
        return "Quantity is required"
    if value < 0:
        return "Quantity cannot be negative"
    return None


def _check_price(value: Any) -> Optional[str]:
    if value is None:
        return "Price is required"
    if value < 0:
        return "Price cannot be negative"
    return None


def _check_category(value: Any) -> Optional[str]:
    if value is None or value == "":
        return "Category is required"
    if value not in CATEGORY_VALUES:
        return f"Category must be one of: {', '.join(CATEGORY_VALUES)}"
    return None


def _check_description(value: Any) -> Optional[str]:
    if value is not None and len(value) > DESCRIPTION_MAX_LENGTH:
        return f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"
    return None


_CHECKS = {
    "name": _check_name,
    "quantity": _check_quantity,
    "price": _check_price,
    "category": _check_category,
    "description": _check_description,
}


def validate_product(
    data: dict[str, Any],
    fields: Optional[Iterable[str]] = None,
) -> list[FieldError]:
    """
    Check product constraints.

    Args:
        data: Normalized product fields
        fields: Restrict checks to these fields (used by updates);
            defaults to every checked field.

    Returns:
        One FieldError per violated field, in declaration order.
    """
    selected = set(fields) if fields is not None else set(_CHECKS)
    errors = []
    for field, check in _CHECKS.items():
        if field not in selected:
            continue
        message = check(data.get(field))
        if message:
            errors.append(FieldError(field, message))
    return errors
