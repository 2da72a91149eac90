"""
Field-level validation primitives.

Entity validators return a list of FieldError; callers turn a non-empty
list into a module ValidationError whose message joins every field message.
"""

from typing import NamedTuple


class FieldError(NamedTuple):
    """A single failed constraint on one field."""

    field: str
    message: str


def join_messages(errors: list[FieldError]) -> str:
    """Join all field messages into the user-facing error message."""
    return ", ".join(error.message for error in errors)


def errors_to_details(errors: list[FieldError]) -> dict:
    """Structured form of the errors for the error envelope details."""
    return {"errors": [error._asdict() for error in errors]}
