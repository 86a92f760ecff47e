"""
User DTOs

Wire representations of a user: UserDTO for responses, UserRequest for bodies.
"""

from pydantic import BaseModel, Field
from typing import Optional


class UserDTO(BaseModel):
    """
    Transfer object for a user.

    Mirrors the User entity field for field. The id is always populated
    on responses.
    """

    id: Optional[int] = Field(None, description="User ID (assigned by the server)")
    name: str = Field(description="Display name")
    email: str = Field(description="Email address")

    class Config:
        """Pydantic configuration."""
        from_attributes = True  # Allow creation from ORM models
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "Ada",
                "email": "ada@x.com"
            }
        }


class UserRequest(BaseModel):
    """
    Request body for create and update.

    Carries only the writable fields. Unknown keys, including any id the
    client sends, are ignored whatever their type.
    """

    name: str = Field(description="Display name")
    email: str = Field(description="Email address")

    def to_dto(self) -> UserDTO:
        return UserDTO(name=self.name, email=self.email)

    class Config:
        """Pydantic configuration."""
        extra = "ignore"
        json_schema_extra = {
            "example": {
                "name": "Ada",
                "email": "ada@x.com"
            }
        }
