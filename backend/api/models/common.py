"""
Response models shared by several routers.
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """A bare confirmation message."""

    message: str
