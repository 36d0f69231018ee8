"""
Error handling module for the timecard application.
Provides the exception hierarchy, error logging, and JSON error responses for the API.
"""

from __future__ import annotations
import logging
from typing import Optional
from datetime import datetime
from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class TimecardError(Exception):
    """Base exception for all timecard errors"""
    def __init__(self, message: str, details: Optional[dict] = None, user_message: Optional[str] = None):
        self.message = message
        self.details = details or {}
        self.user_message = user_message or message
        super().__init__(self.message)


class ValidationError(TimecardError):
    """Input validation errors"""
    pass


class NotFoundError(TimecardError):
    """Lookup of an unknown shift or other catalog item"""
    pass


class CalculationError(TimecardError):
    """Calculation-related errors"""
    pass


def log_error(error: Exception, context: Optional[dict] = None) -> str:
    """
    Log an error with full context and return error ID.

    Args:
        error: The exception that occurred
        context: Additional context (path, method, parameters)

    Returns:
        Error ID for tracking
    """
    error_id = f"{datetime.now().timestamp():.0f}"

    error_details = {
        'error_id': error_id,
        'error_type': type(error).__name__,
        'error_message': str(error),
        'timestamp': datetime.now().isoformat(),
        'context': context or {}
    }

    if isinstance(error, TimecardError):
        logger.error(f"Application error {error_id}: {error_details}")
    else:
        logger.error(f"Unexpected error {error_id}: {error_details}", exc_info=error)

    return error_id


async def handle_application_error(request: Request, exc: TimecardError) -> JSONResponse:
    """
    Handle application-specific errors with user-friendly messages.
    """
    error_id = log_error(exc, context={'path': request.url.path, 'method': request.method})
    status_code = 404 if isinstance(exc, NotFoundError) else 400

    return JSONResponse(
        status_code=status_code,
        content={
            'error': exc.user_message,
            'error_id': error_id,
            'details': exc.details
        }
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors with generic message (no sensitive info).
    """
    error_id = log_error(exc, context={'path': request.url.path, 'method': request.method})

    return JSONResponse(
        status_code=500,
        content={
            'error': 'An unexpected error occurred',
            'error_id': error_id
        }
    )
