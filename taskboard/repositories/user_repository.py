"""
User repository - database operations for User.
"""

from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.errors import ConflictError
from taskboard.models.user import User
from taskboard.repositories.errors import store_errors


class UserRepository:
    """Repository for User database operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get a user by ID."""
        with store_errors("user lookup"):
            result = await self.db.execute(
                select(User).where(User.id == user_id)
            )
            return result.scalar_one_or_none()
    
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email (case-insensitive)."""
        if not email or not email.strip():
            return None
        email_clean = email.strip().lower()
        with store_errors("user lookup"):
            result = await self.db.execute(
                select(User).where(func.lower(User.email) == email_clean)
            )
            return result.scalar_one_or_none()
    
    async def get_many_by_ids(self, user_ids: Iterable[UUID]) -> Dict[UUID, User]:
        """Load several users at once, keyed by id. Unknown ids are left out."""
        ids = [user_id for user_id in set(user_ids) if user_id is not None]
        if not ids:
            return {}
        with store_errors("user lookup"):
            result = await self.db.execute(
                select(User).where(User.id.in_(ids))
            )
            return {user.id: user for user in result.scalars().all()}
    
    async def create(self, *, name: str, email: str, hashed_password: str, role: str) -> User:
        """
        Create a new user.
        
        Raises:
            ConflictError: the email is already taken
        """
        user = User(
            name=name,
            email=email.strip().lower(),
            hashed_password=hashed_password,
            role=role,
        )
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError as exc:
            raise ConflictError("Email already registered", details={"field": "email"}) from exc
        with store_errors("user create"):
            await self.db.refresh(user)
        return user
    
    async def list(self, skip: int = 0, limit: Optional[int] = None) -> List[User]:
        """Get all users, ordered by name."""
        query = select(User).order_by(User.name.asc(), User.email.asc()).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        with store_errors("user list"):
            result = await self.db.execute(query)
            return list(result.scalars().all())
    
    async def update_role(self, user_id: UUID, role: str) -> Optional[User]:
        """Change a user's role."""
        user = await self.get_by_id(user_id)
        if not user:
            return None
        
        user.role = role
        with store_errors("user update"):
            await self.db.flush()
            await self.db.refresh(user)
        return user
    
    async def delete(self, user_id: UUID) -> bool:
        """Delete a user. Returns False if there was nothing to delete."""
        with store_errors("user delete"):
            result = await self.db.execute(
                delete(User).where(User.id == user_id)
            )
            await self.db.flush()
        return result.rowcount == 1
