"""
FastAPI dependencies for the application.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.permissions import Actor
from taskboard.db.session import get_db
from taskboard.models.user import User
from taskboard.repositories.task_repository import TaskRepository
from taskboard.repositories.user_repository import UserRepository
from taskboard.services.auth_service import AuthService
from taskboard.services.task_service import TaskService
from taskboard.services.user_service import UserService

# Missing credentials are reported as 401 by get_current_actor, not 403 by the scheme
security = HTTPBearer(auto_error=False)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_task_repository(db: AsyncSession = Depends(get_db)) -> TaskRepository:
    return TaskRepository(db)


def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    tasks: TaskRepository = Depends(get_task_repository),
) -> AuthService:
    return AuthService(users, tasks)


def get_task_service(
    tasks: TaskRepository = Depends(get_task_repository),
    users: UserRepository = Depends(get_user_repository),
) -> TaskService:
    return TaskService(tasks, users)


def get_user_service(
    users: UserRepository = Depends(get_user_repository),
    tasks: TaskRepository = Depends(get_task_repository),
) -> UserService:
    return UserService(users, tasks)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Get the current authenticated user from the bearer token.
    
    Raises:
        UnauthenticatedError: missing, invalid or expired token, or unknown user
    """
    token = credentials.credentials if credentials else None
    _, user = await auth_service.resolve_actor(token)
    return user


async def get_current_actor(user: User = Depends(get_current_user)) -> Actor:
    """The acting identity passed explicitly into every service call."""
    return Actor(id=user.id, role=user.role)
