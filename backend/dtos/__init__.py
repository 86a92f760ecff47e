"""
Data Transfer Objects (DTOs) Layer

This package contains DTOs that decouple the API layer from the database models.
DTOs prevent leaking database structure to external APIs and allow independent evolution.
"""

from .user_dto import UserDTO, UserRequest

__all__ = ["UserDTO", "UserRequest"]
