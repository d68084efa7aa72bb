"""
User directory business logic.

Creating accounts, changing roles and deleting users go through the
ManageUsers policy rule; self-registration always yields a plain user.
"""

from typing import Any, List

from taskboard.core.config import settings
from taskboard.core.permissions import Actor, ManageUsers, is_allowed
from taskboard.core.security import MAX_PASSWORD_BYTES, hash_password, password_fits
from taskboard.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from taskboard.models.user import User, UserRole
from taskboard.schemas.user import RegisterRequest, UserCreate
from taskboard.services.task_validation import as_uuid, field_error


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserService:
    """Service for the user directory."""
    
    def __init__(self, users, tasks):
        self.users = users
        self.tasks = tasks
    
    @staticmethod
    def _require_admin(actor: Actor) -> None:
        if not is_allowed(actor, ManageUsers()):
            raise ForbiddenError("Admin access required")
    
    async def _load_user(self, user_id: Any) -> User:
        user_uuid = as_uuid(user_id)
        user = await self.users.get_by_id(user_uuid) if user_uuid else None
        if user is None:
            raise NotFoundError("User not found")
        return user
    
    async def _create(self, data: RegisterRequest, role: str) -> User:
        errors = []
        name = (data.name or "").strip()
        if not name:
            errors.append(field_error("name", "Name is required"))
        if len(data.password or "") < settings.MIN_PASSWORD_LENGTH:
            errors.append(
                field_error("password", f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters")
            )
        elif not password_fits(data.password):
            errors.append(field_error("password", f"Password must be at most {MAX_PASSWORD_BYTES} bytes"))
        if errors:
            raise ValidationError(errors)
        
        email = normalize_email(data.email)
        if await self.users.get_by_email(email) is not None:
            raise ConflictError("Email already registered", details={"field": "email"})
        
        return await self.users.create(
            name=name,
            email=email,
            hashed_password=hash_password(data.password),
            role=role,
        )
    
    async def register(self, data: RegisterRequest) -> User:
        """Public self-registration. The new account is always a plain user."""
        return await self._create(data, UserRole.USER.value)
    
    async def create_user(self, actor: Actor, data: UserCreate) -> User:
        """Admin-only account creation with an explicit role."""
        self._require_admin(actor)
        return await self._create(data, UserRole(data.role).value)
    
    async def list_users(self, actor: Actor) -> List[User]:
        """
        Every user, ordered by name.
        
        Open to all authenticated users: picking an assignee needs the list.
        """
        return await self.users.list()
    
    async def update_role(self, actor: Actor, user_id: Any, role: UserRole) -> User:
        """Change a user's role (admin only)."""
        self._require_admin(actor)
        user = await self._load_user(user_id)
        return await self.users.update_role(user.id, UserRole(role).value)
    
    async def delete_user(self, actor: Actor, user_id: Any) -> None:
        """
        Delete a user (admin only).
        
        Refused while the user is still assigned unfinished tasks; tasks
        they created or completed keep pointing at the removed id.
        """
        self._require_admin(actor)
        user = await self._load_user(user_id)
        
        open_tasks = await self.tasks.count_open_for_assignee(user.id)
        if open_tasks:
            raise ConflictError(
                "User still has open task assignments; reassign them first",
                details={"openTasks": open_tasks},
            )
        
        await self.users.delete(user.id)
