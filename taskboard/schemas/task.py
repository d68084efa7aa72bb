"""
Task Pydantic schemas.

Request payload fields are untyped on purpose: a wrong JSON type (a number
for ``dueDate``, an object for ``title``) must reach the task service, which
validates the whole payload at once and reports every violated field
together. Typed fields would let pydantic coerce some of those values (a
number into a datetime) and reject others before the service runs.
"""

from datetime import datetime
from typing import Any, List, Optional

from taskboard.schemas.base import CamelModel, StoredRead
from taskboard.schemas.user import UserSummary


class TaskCreate(CamelModel):
    """Schema for creating a new task."""
    
    title: Any = ""
    description: Any = ""
    due_date: Any = None
    priority: Any = None
    assigned_to: Any = None


class TaskUpdate(CamelModel):
    """
    Schema for updating a task. All fields optional.
    
    Only fields the caller actually sent are considered, and of those only
    truthy ones: an empty string means "leave unchanged".
    """
    
    title: Any = None
    description: Any = None
    due_date: Any = None
    status: Any = None
    priority: Any = None
    assigned_to: Any = None


class TaskFilters(CamelModel):
    """Exact-match listing filters."""
    
    status: Optional[str] = None
    priority: Optional[str] = None


class TaskRead(StoredRead):
    """Task view with user references resolved to summaries."""
    
    title: str
    description: str
    due_date: datetime
    priority: str
    status: str
    assigned_to: Optional[UserSummary] = None
    created_by: Optional[UserSummary] = None


class TaskPage(CamelModel):
    """One page of a task listing."""
    
    tasks: List[TaskRead]
    current_page: int
    total_pages: int
    total_tasks: int
