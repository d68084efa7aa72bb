"""
Task router - API endpoints for tasks.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from taskboard.core.config import settings
from taskboard.core.dependencies import get_current_actor, get_task_service
from taskboard.core.permissions import Actor
from taskboard.schemas.task import TaskCreate, TaskFilters, TaskPage, TaskRead, TaskUpdate
from taskboard.services.task_service import TaskService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(
    data: TaskCreate,
    actor: Actor = Depends(get_current_actor),
    service: TaskService = Depends(get_task_service),
):
    """Create a new task. The caller becomes its creator."""
    task = await service.create_task(actor, data)
    logger.info("Task %s created by %s", task.id, actor.id)
    return task


@router.get("", response_model=TaskPage)
async def list_tasks(
    status: Optional[str] = None,
    priority: Optional[str] = None,
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    actor: Actor = Depends(get_current_actor),
    service: TaskService = Depends(get_task_service),
):
    """
    List tasks with pagination and filters.
    
    Admins see every task; other users only the tasks assigned to them.
    Filters: status, priority.
    """
    return await service.list_tasks(
        actor,
        TaskFilters(status=status, priority=priority),
        page=page,
        page_size=limit or settings.DEFAULT_PAGE_SIZE,
    )


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(
    task_id: UUID,
    actor: Actor = Depends(get_current_actor),
    service: TaskService = Depends(get_task_service),
):
    """Get a task by ID."""
    return await service.get_task(actor, task_id)


@router.put("/{task_id}", response_model=TaskRead)
async def update_task(
    task_id: UUID,
    data: TaskUpdate,
    actor: Actor = Depends(get_current_actor),
    service: TaskService = Depends(get_task_service),
):
    """Update a task. Only the fields present (and non-empty) in the body change."""
    task = await service.update_task(actor, task_id, data)
    logger.info("Task %s updated by %s", task_id, actor.id)
    return task


@router.delete("/{task_id}")
async def delete_task(
    task_id: UUID,
    actor: Actor = Depends(get_current_actor),
    service: TaskService = Depends(get_task_service),
):
    """Delete a task."""
    await service.delete_task(actor, task_id)
    logger.info("Task %s deleted by %s", task_id, actor.id)
    return {"message": "Task deleted successfully"}
