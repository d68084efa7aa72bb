"""
Authentication router for login, registration and user management.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from taskboard.core.dependencies import (
    get_auth_service,
    get_current_actor,
    get_current_user,
    get_user_service,
)
from taskboard.core.permissions import Actor
from taskboard.models.user import User
from taskboard.schemas.user import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserCreate,
    UserRead,
    UserRoleUpdate,
)
from taskboard.services.auth_service import AuthService
from taskboard.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Create a plain user account and return a token for it."""
    result = await auth_service.register(data)
    logger.info("User %s registered", result.user.id)
    return result


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Authenticate user and return JWT access token."""
    return await auth_service.login(credentials)


@router.get("/me", response_model=UserRead)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get information about the currently authenticated user."""
    return current_user


@router.get("/users", response_model=List[UserRead])
async def list_users(
    actor: Actor = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
):
    """List all users (used to pick an assignee)."""
    return await service.list_users(actor)


@router.post("/users", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    actor: Actor = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
):
    """
    Create a new user with any role.
    
    Only admin users can create users this way.
    """
    user = await service.create_user(actor, data)
    logger.info("User %s created by admin %s with role %s", user.id, actor.id, user.role)
    return user


@router.patch("/users/{user_id}", response_model=UserRead)
async def update_user_role(
    user_id: UUID,
    data: UserRoleUpdate,
    actor: Actor = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
):
    """Change a user's role. Admin only."""
    user = await service.update_role(actor, user_id, data.role)
    logger.info("User %s role set to %s by %s", user_id, user.role, actor.id)
    return user


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: UUID,
    actor: Actor = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
):
    """Delete a user. Admin only; refused while they have open assignments."""
    await service.delete_user(actor, user_id)
    logger.info("User %s deleted by %s", user_id, actor.id)
    return {"message": "User deleted successfully"}
