"""API models package."""

from .common import MessageResponse
from .errors import ErrorResponse

__all__ = [
    "MessageResponse",
    "ErrorResponse",
]
