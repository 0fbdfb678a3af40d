"""
Prime Portal API package.

Provides the FastAPI application that exposes session coordination and
admin OTP login to the portal frontend.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
