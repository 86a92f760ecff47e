"""
Utility functions and decorators.
"""

from .error_handlers import handle_api_errors
from .result import Result

__all__ = ["handle_api_errors", "Result"]
