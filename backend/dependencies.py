"""
Dependency injection providers for FastAPI.

This module provides factory functions for creating repository and service instances,
following the Dependency Inversion Principle. This allows for easier testing
and better separation of concerns.
"""

from sqlalchemy.orm import Session
from fastapi import Depends
from database import get_db
from repositories.user_repository import UserRepository
from services.interfaces import IUserService
from services.user_service import UserService


def get_user_repository(db: Session) -> UserRepository:
    """
    Factory function for creating UserRepository instances.

    Args:
        db: Database session

    Returns:
        UserRepository instance
    """
    return UserRepository(db)


def get_user_service(db: Session = Depends(get_db)) -> IUserService:
    """
    Factory function for creating UserService instances.

    Args:
        db: Database session (injected)

    Returns:
        IUserService: User service implementation wired to a UserRepository
    """
    return UserService(db, get_user_repository(db))
