"""
Models package.

Import all models here so they are registered with SQLAlchemy.
"""

from taskboard.models.user import User, UserRole
from taskboard.models.task import Task, TaskPriority, TaskStatus

__all__ = [
    "User",
    "UserRole",
    "Task",
    "TaskPriority",
    "TaskStatus",
]
