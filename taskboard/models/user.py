"""
User model for authentication and authorization.
"""

from enum import Enum

from sqlalchemy import String, Index
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.models.base_model import TimestampedModel


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class User(TimestampedModel):
    """
    User table - people who create, own and work on tasks.
    
    The role decides what the access policy lets them do.
    """
    
    __tablename__ = "user"
    
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    
    # Stored lower-cased
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=UserRole.USER.value,
    )
    
    __table_args__ = (
        Index("ix_user_email", "email", unique=True),
    )
