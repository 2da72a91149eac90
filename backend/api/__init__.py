"""
Stockroom API package.

Provides the FastAPI application for the Stockroom inventory service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
