"""
User Service

Handles business logic for user operations: orchestrates the user
repository and converts between the User entity and UserDTO.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from dtos.user_dto import UserDTO
from exceptions import UserNotFoundError
from models import User
from repositories.user_repository import UserRepository
from services.interfaces import IUserService
from utils.logging_utils import log_operation
from utils.result import Result

logger = logging.getLogger(__name__)


class UserService(IUserService):
    """Service for user-related business logic."""

    def __init__(self, db: Session, user_repo: Optional[UserRepository] = None):
        """
        Initialize UserService.

        Args:
            db: Database session; commits and rollbacks happen here
            user_repo: Repository to use (defaults to a UserRepository on db)
        """
        self.db = db
        self.user_repo = user_repo or UserRepository(db)

    def get_all_users(self) -> List[UserDTO]:
        return [self._to_dto(user) for user in self.user_repo.get_all()]

    def get_user_by_id(self, user_id: int) -> Result[UserDTO, UserNotFoundError]:
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            return Result.err(UserNotFoundError(user_id))
        return Result.ok(self._to_dto(user))

    @log_operation("create_user")
    def create_user(self, user: UserDTO) -> UserDTO:
        entity = self._to_entity(user)
        entity.id = None
        saved = self._commit(lambda: self.user_repo.save(entity))
        logger.info(f"Created user {saved.id}")
        return self._to_dto(saved)

    @log_operation("update_user")
    def update_user(self, user_id: int, user: UserDTO) -> UserDTO:
        entity = self._to_entity(user)
        entity.id = user_id

        # save() is an upsert: an unknown id is inserted rather than rejected
        if not self.user_repo.exists(user_id):
            logger.warning(f"Update of unknown user {user_id} created a new user")

        saved = self._commit(lambda: self.user_repo.save(entity))
        return self._to_dto(saved)

    @log_operation("delete_user")
    def delete_user(self, user_id: int) -> None:
        deleted = self._commit(lambda: self.user_repo.delete_by_id(user_id))
        if not deleted:
            logger.debug(f"Delete of unknown user {user_id} ignored")

    def _commit(self, operation):
        """Run a repository write and commit it, rolling back on failure."""
        try:
            result = operation()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return result

    @staticmethod
    def _to_dto(user: User) -> UserDTO:
        return UserDTO.model_validate(user)

    @staticmethod
    def _to_entity(user: UserDTO) -> User:
        return User(id=user.id, name=user.name, email=user.email)
