"""
Task repository - database operations for Task.

Filters are plain dicts of exact-match column values, e.g.
``{"assigned_to_id": ..., "status": "pending"}``.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.models.task import Task, TaskStatus
from taskboard.repositories.errors import store_errors
from taskboard.utils.time import utc_now

FILTERABLE_COLUMNS = {
    "assigned_to_id": Task.assigned_to_id,
    "created_by_id": Task.created_by_id,
    "status": Task.status,
    "priority": Task.priority,
}

UPDATABLE_FIELDS = {"title", "description", "due_date", "status", "priority", "assigned_to_id"}


def _apply_filters(query, filters: Optional[Dict[str, Any]]):
    for key, value in (filters or {}).items():
        column = FILTERABLE_COLUMNS.get(key)
        if column is None:
            raise ValueError(f"Unsupported task filter: {key}")
        query = query.where(column == value)
    return query


class TaskRepository:
    """Repository for Task database operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def insert(self, values: Dict[str, Any]) -> Task:
        """Create a new task."""
        task = Task(**values)
        self.db.add(task)
        with store_errors("task insert"):
            await self.db.flush()
            await self.db.refresh(task)
        return task
    
    async def get_by_id(self, task_id: UUID) -> Optional[Task]:
        """Get a task by ID."""
        with store_errors("task lookup"):
            result = await self.db.execute(
                select(Task).where(Task.id == task_id)
            )
            return result.scalar_one_or_none()
    
    async def find(
        self,
        filters: Optional[Dict[str, Any]] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Task]:
        """List tasks matching ``filters``, newest first."""
        query = _apply_filters(select(Task), filters)
        query = query.order_by(Task.created_at.desc(), Task.id.desc())
        query = query.limit(limit).offset(offset)
        
        with store_errors("task list"):
            result = await self.db.execute(query)
            return list(result.scalars().all())
    
    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count tasks matching ``filters``."""
        query = _apply_filters(select(func.count()).select_from(Task), filters)
        with store_errors("task count"):
            result = await self.db.execute(query)
            return int(result.scalar_one())
    
    async def count_open_for_assignee(self, user_id: UUID) -> int:
        """Count unfinished tasks assigned to a user."""
        query = select(func.count()).select_from(Task).where(
            Task.assigned_to_id == user_id,
            Task.status != TaskStatus.COMPLETED.value,
        )
        with store_errors("task count"):
            result = await self.db.execute(query)
            return int(result.scalar_one())
    
    async def update_by_id(self, task_id: UUID, changes: Dict[str, Any]) -> Optional[Task]:
        """
        Overwrite the given fields of a task.
        
        Returns:
            The refreshed task, or None if it no longer exists
        """
        task = await self.get_by_id(task_id)
        if not task:
            return None
        
        for field, value in changes.items():
            if field not in UPDATABLE_FIELDS:
                raise ValueError(f"Task field cannot be updated: {field}")
            setattr(task, field, value)
        
        task.updated_at = utc_now()
        with store_errors("task update"):
            await self.db.flush()
            await self.db.refresh(task)
        return task
    
    async def delete_by_id(self, task_id: UUID) -> bool:
        """Delete a task. Returns False if there was nothing to delete."""
        with store_errors("task delete"):
            result = await self.db.execute(
                delete(Task).where(Task.id == task_id)
            )
            await self.db.flush()
        return result.rowcount == 1
