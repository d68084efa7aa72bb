"""
Task business logic service.

Every operation takes the acting user explicitly, loads what it needs,
asks the access policy, and only then touches the store. Failures are
raised as the typed errors in ``taskboard.errors``; nothing is logged here.
"""

import math
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from taskboard.core.permissions import (
    Action,
    Actor,
    CreateTask,
    DeleteTask,
    ListTasks,
    ReadTask,
    UpdateTask,
    is_allowed,
)
from taskboard.errors import ForbiddenError, InvalidReferenceError, NotFoundError, ValidationError
from taskboard.models.task import Task
from taskboard.models.user import User
from taskboard.schemas.task import TaskCreate, TaskFilters, TaskPage, TaskRead, TaskUpdate
from taskboard.schemas.user import UserSummary
from taskboard.services.task_validation import (
    as_uuid,
    clamp_page,
    supplied_patch_fields,
    validate_task_draft,
    validate_task_patch,
)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


def summarize_user(user: Optional[User]) -> Optional[UserSummary]:
    """Id, name and email only."""
    if user is None:
        return None
    return UserSummary(id=user.id, name=user.name, email=user.email)


def resolve_task(task: Task, users: Dict[UUID, User]) -> TaskRead:
    """Build the task view, expanding user ids from ``users``."""
    return TaskRead(
        id=task.id,
        title=task.title,
        description=task.description,
        due_date=task.due_date,
        priority=task.priority,
        status=task.status,
        assigned_to=summarize_user(users.get(task.assigned_to_id)),
        created_by=summarize_user(users.get(task.created_by_id)),
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


class TaskService:
    """Service for task business logic."""
    
    def __init__(self, tasks, users):
        """
        Args:
            tasks: Task store (``TaskRepository`` or anything with its interface)
            users: User directory (``UserRepository`` or anything with its interface)
        """
        self.tasks = tasks
        self.users = users
    
    # ---- helpers ----
    
    @staticmethod
    def _authorize(actor: Actor, action: Action, target: Any = None, message: str = "Access denied") -> None:
        if not is_allowed(actor, action, target):
            raise ForbiddenError(message)
    
    async def _load_task(self, task_id: Any) -> Task:
        task_uuid = as_uuid(task_id)
        task = await self.tasks.get_by_id(task_uuid) if task_uuid else None
        if task is None:
            raise NotFoundError("Task not found")
        return task
    
    async def _resolve_user(self, raw_id: Any, message: str) -> User:
        user_id = as_uuid(raw_id)
        user = await self.users.get_by_id(user_id) if user_id else None
        if user is None:
            raise InvalidReferenceError(message, details={"field": "assignedTo", "value": str(raw_id)})
        return user
    
    async def _resolve_many(self, tasks: Iterable[Task]) -> List[TaskRead]:
        tasks = list(tasks)
        user_ids = set()
        for task in tasks:
            user_ids.add(task.assigned_to_id)
            user_ids.add(task.created_by_id)
        users = await self.users.get_many_by_ids(user_ids) if user_ids else {}
        return [resolve_task(task, users) for task in tasks]
    
    async def _resolve_one(self, task: Task) -> TaskRead:
        (view,) = await self._resolve_many([task])
        return view
    
    # ---- operations ----
    
    async def create_task(self, actor: Actor, draft: TaskCreate) -> TaskRead:
        """
        Create a task authored by ``actor``.
        
        Raises:
            ValidationError: listing every invalid field
            InvalidReferenceError: the assignee does not exist
        """
        self._authorize(actor, CreateTask())
        
        cleaned, errors = validate_task_draft(draft)
        if errors:
            raise ValidationError(errors)
        
        assignee = await self._resolve_user(cleaned["assigned_to"], "Assigned user does not exist")
        creator = await self.users.get_by_id(actor.id)
        if creator is None:
            raise InvalidReferenceError("Creating user does not exist", details={"field": "createdBy"})
        
        task = await self.tasks.insert(
            {
                "title": cleaned["title"],
                "description": cleaned["description"],
                "due_date": cleaned["due_date"],
                "priority": cleaned["priority"],
                "status": cleaned["status"],
                "assigned_to_id": assignee.id,
                "created_by_id": creator.id,
            }
        )
        return resolve_task(task, {assignee.id: assignee, creator.id: creator})
    
    async def list_tasks(
        self,
        actor: Actor,
        filters: Optional[TaskFilters] = None,
        page: Optional[int] = DEFAULT_PAGE,
        page_size: Optional[int] = DEFAULT_PAGE_SIZE,
    ) -> TaskPage:
        """
        List tasks newest first.
        
        Non-admins only ever see tasks assigned to them, whatever the filters say.
        """
        self._authorize(actor, ListTasks())
        
        page = clamp_page(page, DEFAULT_PAGE)
        page_size = clamp_page(page_size, DEFAULT_PAGE_SIZE)
        
        query: Dict[str, Any] = {}
        if filters is not None:
            if filters.status:
                query["status"] = filters.status
            if filters.priority:
                query["priority"] = filters.priority
        if not actor.is_admin:
            query["assigned_to_id"] = actor.id
        
        total = await self.tasks.count(query)
        tasks = await self.tasks.find(query, limit=page_size, offset=(page - 1) * page_size)
        
        return TaskPage(
            tasks=await self._resolve_many(tasks),
            current_page=page,
            total_pages=math.ceil(total / page_size),
            total_tasks=total,
        )
    
    async def get_task(self, actor: Actor, task_id: Any) -> TaskRead:
        """Get a task by ID."""
        task = await self._load_task(task_id)
        self._authorize(actor, ReadTask(), task)
        return await self._resolve_one(task)
    
    async def update_task(self, actor: Actor, task_id: Any, patch: TaskUpdate) -> TaskRead:
        """
        Apply the supplied fields of ``patch``.
        
        Status moves freely between pending, in-progress and completed.
        Reassignment is admin-only even for the current assignee.
        """
        task = await self._load_task(task_id)
        
        supplied = supplied_patch_fields(patch)
        self._authorize(actor, UpdateTask(frozenset(supplied)), task)
        if "assigned_to" in supplied and not actor.is_admin:
            raise ForbiddenError("Only administrators can reassign tasks")
        
        changes, errors = validate_task_patch(supplied)
        if errors:
            raise ValidationError(errors)
        
        if "assigned_to" in changes:
            assignee = await self._resolve_user(changes.pop("assigned_to"), "Assigned user does not exist")
            changes["assigned_to_id"] = assignee.id
        
        if changes:
            updated = await self.tasks.update_by_id(task.id, changes)
            if updated is None:
                # Deleted between the read and the write
                raise NotFoundError("Task not found")
            task = updated
        
        return await self._resolve_one(task)
    
    async def delete_task(self, actor: Actor, task_id: Any) -> None:
        """Delete a task. Allowed for admins and the task's creator."""
        task = await self._load_task(task_id)
        self._authorize(actor, DeleteTask(), task)
        
        deleted = await self.tasks.delete_by_id(task.id)
        if not deleted:
            raise NotFoundError("Task not found")
