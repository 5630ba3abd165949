"""
Eros identity API package.

Provides the FastAPI application for identity verification and session tokens.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
