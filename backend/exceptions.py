"""
Custom exception classes for the application.

This module defines domain-specific exceptions that provide better error handling
and clearer error messages throughout the application.
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    def __init__(self, message: str, missing_keys: list[str] | None = None):
        details = {"missing_keys": missing_keys} if missing_keys else {}
        super().__init__(message, details)


class NotFoundError(ApplicationError):
    """Raised when a requested resource does not exist"""

    def __init__(self, resource: str, resource_id: int | str, message: str | None = None):
        details = {"resource": resource, "resource_id": resource_id}
        msg = message or f"{resource} not found"
        super().__init__(msg, details)


class UserNotFoundError(NotFoundError):
    """Raised when no user exists with the requested id"""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__("User", user_id)
