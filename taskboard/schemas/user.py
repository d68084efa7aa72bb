"""
User Pydantic schemas.
"""

from uuid import UUID

from pydantic import EmailStr

from taskboard.models.user import UserRole
from taskboard.schemas.base import CamelModel, StoredRead


class RegisterRequest(CamelModel):
    """Schema for public self-registration."""
    
    name: str = ""
    email: EmailStr
    password: str = ""


class UserCreate(RegisterRequest):
    """Schema for an admin creating a user with an explicit role."""
    
    role: UserRole = UserRole.USER


class UserRoleUpdate(CamelModel):
    """Schema for changing a user's role."""
    
    role: UserRole


class UserRead(StoredRead):
    """Schema for reading user data (API response). Never carries the password hash."""
    
    name: str
    email: str
    role: str


class UserSummary(CamelModel):
    """Compact user reference embedded in task views."""
    
    id: UUID
    name: str
    email: str


class LoginRequest(CamelModel):
    """Schema for login request."""
    
    email: EmailStr
    password: str


class AuthResponse(CamelModel):
    """Schema for login and registration responses."""
    
    token: str
    token_type: str = "bearer"
    user: UserRead
