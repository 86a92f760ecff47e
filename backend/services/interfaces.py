"""
Service Interfaces

Abstract base classes for service layer following Dependency Inversion Principle.
This allows for dependency injection and easier testing/mocking.
"""

from abc import ABC, abstractmethod
from typing import List

from dtos.user_dto import UserDTO
from exceptions import UserNotFoundError
from utils.result import Result


class IUserService(ABC):
    """
    Abstract interface for user management services.
    """

    @abstractmethod
    def get_all_users(self) -> List[UserDTO]:
        """
        List every stored user.

        Returns:
            List of UserDTO in storage order (empty if none)
        """
        pass

    @abstractmethod
    def get_user_by_id(self, user_id: int) -> Result[UserDTO, UserNotFoundError]:
        """
        Look up a single user.

        Args:
            user_id: User id

        Returns:
            Ok(UserDTO), or Err(UserNotFoundError) when no such user exists
        """
        pass

    @abstractmethod
    def create_user(self, user: UserDTO) -> UserDTO:
        """
        Store a new user. Any id on the input is ignored.

        Returns:
            The stored user with its assigned id
        """
        pass

    @abstractmethod
    def update_user(self, user_id: int, user: UserDTO) -> UserDTO:
        """
        Replace the user stored under user_id. Any id on the input is ignored.

        Creates the user under user_id when it does not exist yet.

        Returns:
            The stored user, whose id is always user_id
        """
        pass

    @abstractmethod
    def delete_user(self, user_id: int) -> None:
        """
        Remove a user. Deleting an unknown id is not an error.
        """
        pass
