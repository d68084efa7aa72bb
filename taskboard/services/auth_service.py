"""
Authentication service for user login and token management.
"""

from typing import Optional, Tuple

from taskboard.core.jwt import create_access_token, decode_access_token
from taskboard.core.permissions import Actor
from taskboard.core.security import verify_password
from taskboard.errors import UnauthenticatedError
from taskboard.models.user import User
from taskboard.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserRead
from taskboard.services.task_validation import as_uuid
from taskboard.services.user_service import UserService, normalize_email


class AuthService:
    """Service for authentication operations."""
    
    def __init__(self, users, tasks):
        self.users = users
        self.user_service = UserService(users, tasks)
    
    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """
        Authenticate a user by email and password.
        
        Returns:
            User object if authentication successful, None otherwise
        """
        user = await self.users.get_by_email(normalize_email(email))
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user
    
    def create_token_for_user(self, user: User) -> str:
        """Create a JWT access token for a user."""
        return create_access_token({"sub": str(user.id), "role": user.role})
    
    def _auth_response(self, user: User) -> AuthResponse:
        return AuthResponse(
            token=self.create_token_for_user(user),
            user=UserRead.model_validate(user),
        )
    
    async def login(self, credentials: LoginRequest) -> AuthResponse:
        """
        Perform user login.
        
        Raises:
            UnauthenticatedError: unknown email or wrong password (indistinguishable)
        """
        user = await self.authenticate_user(credentials.email, credentials.password)
        if not user:
            raise UnauthenticatedError("Incorrect email or password")
        return self._auth_response(user)
    
    async def register(self, data: RegisterRequest) -> AuthResponse:
        """Register a new plain user and sign them in."""
        user = await self.user_service.register(data)
        return self._auth_response(user)
    
    async def resolve_actor(self, token: Optional[str]) -> Tuple[Actor, User]:
        """
        Turn a bearer token into the acting user.
        
        The user is reloaded so that deleted accounts are rejected and a
        role change applies to tokens issued before it.
        """
        payload = decode_access_token(token) if token else None
        if not payload:
            raise UnauthenticatedError("Invalid authentication credentials")
        
        user_id = as_uuid(payload.get("sub"))
        if user_id is None:
            raise UnauthenticatedError("Invalid token payload")
        
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise UnauthenticatedError("User not found")
        
        return Actor(id=user.id, role=user.role), user
