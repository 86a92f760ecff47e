"""
User API endpoints
"""
from fastapi import APIRouter, Depends, Path, Response
from typing import List
import logging

from constants import ApiPaths, DatabaseLimits, HTTPStatus
from dependencies import get_user_service
from dtos.user_dto import UserDTO, UserRequest
from services.interfaces import IUserService
from utils.error_handlers import handle_api_errors

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(ApiPaths.USERS, response_model=List[UserDTO])
@handle_api_errors("List users")
def list_users(service: IUserService = Depends(get_user_service)):
    """List every user."""
    return service.get_all_users()


@router.get(ApiPaths.USERS + "/{user_id}", response_model=UserDTO)
@handle_api_errors("Get user")
def get_user(user_id: int, service: IUserService = Depends(get_user_service)):
    """
    Get a single user.

    Raises:
        HTTPException: 404 if the user does not exist
    """
    return service.get_user_by_id(user_id).unwrap()


@router.post(ApiPaths.USERS, response_model=UserDTO, status_code=HTTPStatus.CREATED)
@handle_api_errors("Create user")
def create_user(user: UserRequest, service: IUserService = Depends(get_user_service)):
    """Create a user. An id in the body is ignored."""
    return service.create_user(user.to_dto())


@router.put(ApiPaths.USERS + "/{user_id}", response_model=UserDTO)
@handle_api_errors("Update user")
def update_user(
    user_id: int = Path(ge=DatabaseLimits.MIN_ID, le=DatabaseLimits.MAX_ID),
    user: UserRequest = ...,
    service: IUserService = Depends(get_user_service),
):
    """
    Replace the user stored under user_id.

    Any id in the body is ignored. When no user exists under user_id one
    is created there. Ids outside the storable range are rejected with 422.
    """
    return service.update_user(user_id, user.to_dto())


@router.delete(ApiPaths.USERS + "/{user_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Delete user")
def delete_user(user_id: int, service: IUserService = Depends(get_user_service)):
    """Delete a user. Succeeds whether or not the user existed."""
    service.delete_user(user_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)
