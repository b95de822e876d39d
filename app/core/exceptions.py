"""
Application exceptions.

Services raise these; the handlers registered in ``app.main`` turn them into
the ``{"success": false, "message": ...}`` envelope with the matching status.
"""
from typing import Optional, Dict, Any


class AppError(Exception):
    """Base exception for all handled application errors."""

    status_code: int = 500

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class ValidationError(AppError):
    """Malformed input, duplicate unique values or bad category references."""

    status_code = 400


class AuthenticationError(AppError):
    """Bad credentials, or a missing, invalid or expired token."""

    status_code = 401


class AuthorizationError(AppError):
    """Role or ownership mismatch."""

    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class StoreError(AppError):
    """Unexpected failure reported by the database."""

    status_code = 500
