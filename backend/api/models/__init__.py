"""API models package."""

from .errors import ErrorResponse, error_response_for, status_code_for

__all__ = [
    "ErrorResponse",
    "error_response_for",
    "status_code_for",
]
