"""User identity routes.

Endpoints:
- POST /users/create: Register a LOCAL user
- POST /users/create/google-user: Create or refresh a GOOGLE user
- POST /users/search, GET /users/all: List users
- GET /users/by-username, POST /users/by-email: Lookups
- POST /users/exists-by-email, POST /users/exists-by-username: Existence checks
- GET /users/{id}, PATCH /users/{id}: Read / partial update
- PATCH /users/{id}/deactivate: Soft delete

Domain errors raised by the services are mapped by api.errors.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from api.dependencies import get_password_hasher, get_user_repo
from api.models import (
    CreateUserRequest,
    EmailRequest,
    ExistsResponse,
    UpdateUserRequest,
    UsernameRequest,
    UserResponse,
    UserSearchResponse,
)
from api.security import Principal, get_current_principal
from domain.model.user import User
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository
from services import user_lifecycle_service, user_query_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _found(user: User | None) -> UserResponse:
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.from_domain(user)


# ── registration (public) ────────────────────────────────


@router.post("/create", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """Register a LOCAL user with a password."""
    user = user_lifecycle_service.register_local(repo, hasher, request.to_domain())
    return UserResponse.from_domain(user)


@router.post("/create/google-user", response_model=UserResponse)
async def upsert_google_user(
    request: CreateUserRequest,
    repo: UserRepository = Depends(get_user_repo),
):
    """Create a GOOGLE user, or refresh the one that already owns the email."""
    user = user_lifecycle_service.upsert_google(repo, request.to_domain())
    return UserResponse.from_domain(user)


# ── queries ──────────────────────────────────────────────


@router.post("/search", response_model=UserSearchResponse)
async def search_users(
    principal: Principal = Depends(get_current_principal),
    repo: UserRepository = Depends(get_user_repo),
):
    users = [UserResponse.from_domain(u) for u in user_query_service.find_all(repo)]
    return UserSearchResponse(users=users, total=len(users))


@router.get("/all", response_model=list[UserResponse])
async def get_all_users(
    principal: Principal = Depends(get_current_principal),
    repo: UserRepository = Depends(get_user_repo),
):
    return [UserResponse.from_domain(u) for u in user_query_service.find_all(repo)]


@router.get("/by-username", response_model=UserResponse)
async def get_user_by_username(
    username: str = Query(...),
    principal: Principal = Depends(get_current_principal),
    repo: UserRepository = Depends(get_user_repo),
):
    return _found(user_query_service.find_by_username(repo, username))


@router.post("/by-email", response_model=UserResponse)
async def get_user_by_email(
    request: EmailRequest,
    principal: Principal = Depends(get_current_principal),
    repo: UserRepository = Depends(get_user_repo),
):
    return _found(user_query_service.find_by_email(repo, request.email))


@router.post("/exists-by-email", response_model=ExistsResponse)
async def exists_by_email(
    request: EmailRequest,
    principal: Principal = Depends(get_current_principal),
    repo: UserRepository = Depends(get_user_repo),
):
    return ExistsResponse(exists=user_query_service.exists_by_email(repo, request.email))


@router.post("/exists-by-username", response_model=ExistsResponse)
async def exists_by_username(
    request: UsernameRequest,
    principal: Principal = Depends(get_current_principal),
    repo: UserRepository = Depends(get_user_repo),
):
    return ExistsResponse(exists=user_query_service.exists_by_username(repo, request.username))


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    principal: Principal = Depends(get_current_principal),
    repo: UserRepository = Depends(get_user_repo),
):
    return _found(user_query_service.find_by_id(repo, user_id))


# ── mutations ────────────────────────────────────────────


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    principal: Principal = Depends(get_current_principal),
    repo: UserRepository = Depends(get_user_repo),
):
    """Partially update a user. Fields omitted from the body are left unchanged."""
    user = user_lifecycle_service.update_partial(repo, user_id, request.to_patch())
    logger.info("User updated via API", extra={"userId": user_id, "caller": principal.subject})
    return UserResponse.from_domain(user)


@router.patch("/{user_id}/deactivate", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_user(
    user_id: str,
    principal: Principal = Depends(get_current_principal),
    repo: UserRepository = Depends(get_user_repo),
):
    """Soft-delete a user. The record stays queryable with active=false."""
    user_lifecycle_service.deactivate(repo, user_id)
    logger.info("User deactivated via API", extra={"userId": user_id, "caller": principal.subject})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
