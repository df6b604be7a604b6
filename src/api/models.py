"""Pydantic models for API request/response."""

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from domain.model.user import User, UserPatch, UserRegistration


class CreateUserRequest(BaseModel):
    """Request model for local registration and Google upsert.

    Fields are optional here so that the service, not pydantic, reports the
    first missing field.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    lastname: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    provider: Optional[str] = None
    birth_date: Optional[date] = Field(None, alias="birthDate")

    def to_domain(self) -> UserRegistration:
        return UserRegistration(
            name=self.name,
            lastname=self.lastname,
            username=self.username,
            email=self.email,
            provider=self.provider,
            password=self.password,
            birth_date=self.birth_date,
        )


class UpdateUserRequest(BaseModel):
    """Request model for partial update. Omitted fields are left unchanged."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    lastname: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    birth_date: Optional[date] = Field(None, alias="birthDate")

    def to_patch(self) -> UserPatch:
        """Only fields present in the request body become part of the patch."""
        return UserPatch(**{name: getattr(self, name) for name in self.model_fields_set})


class EmailRequest(BaseModel):
    email: str


class UsernameRequest(BaseModel):
    username: str


class UserResponse(BaseModel):
    """User as returned by the API. Never carries a credential."""
    id: str
    name: Optional[str] = None
    lastname: Optional[str] = None
    birth_date: Optional[date] = None
    username: str
    email: str
    provider: str
    active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            lastname=user.lastname,
            birth_date=user.birth_date,
            username=user.username,
            email=user.email,
            provider=user.provider.value,
            active=user.active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserSearchResponse(BaseModel):
    users: list[UserResponse]
    total: int = Field(..., description="Number of users returned")


class ExistsResponse(BaseModel):
    exists: bool


class ErrorResponse(BaseModel):
    status: int
    message: str
    error: str
    field: Optional[str] = None
