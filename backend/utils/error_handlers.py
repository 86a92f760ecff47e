"""
Error handling decorators and utilities for API endpoints.

Centralizes the translation of application exceptions into HTTP responses
so that every endpoint reports failures the same way.
"""

import inspect
from functools import wraps
from typing import Callable
from fastapi import HTTPException
import logging

from constants import HTTPStatus
from exceptions import (
    ApplicationError,
    ConfigurationError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


def _to_http_exception(operation_name: str, e: Exception) -> HTTPException:
    """Map an exception raised inside an endpoint to an HTTPException."""
    if isinstance(e, NotFoundError):
        logger.warning(f"{operation_name} - Not found: {e.message} {e.details}")
        return HTTPException(
            status_code=HTTPStatus.NOT_FOUND,
            detail=e.message
        )
    if isinstance(e, ConfigurationError):
        logger.error(f"{operation_name} - Configuration error: {e.message}", exc_info=True)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"Configuration error: {e.message}"
        )
    if isinstance(e, ApplicationError):
        logger.error(f"{operation_name} - Application error: {e.message}", exc_info=True)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"{operation_name} failed: {e.message}"
        )
    logger.error(f"{operation_name} - Unexpected error: {e}", exc_info=True)
    return HTTPException(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        detail=f"{operation_name} failed. Please check server logs or contact support."
    )


def handle_api_errors(operation_name: str):
    """
    Decorator to handle common API errors consistently across endpoints.

    NotFoundError becomes a 404; every other failure, including database
    errors, becomes a 500 after being logged with its traceback.
    HTTPException passes through untouched.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Get user")

    Example:
        @router.get("/users/{user_id}")
        @handle_api_errors("Get user")
        def get_user(user_id: int, ...):
            return service.get_user_by_id(user_id).unwrap()
    """
    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                raise _to_http_exception(operation_name, e) from e

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                raise _to_http_exception(operation_name, e) from e

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
