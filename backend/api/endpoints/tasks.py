"""
Task API endpoints.

All routes require a bearer token; every operation is scoped to the caller.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from backend.api.dependencies.auth import get_auth_context
from backend.api.dependencies.container import get_task_service_dep
from backend.api.schemas import ErrorResponse, TaskListResponse, TaskResponse
from backend.models.profile import AuthContext
from backend.models.task import TaskCreate, TaskUpdate
from backend.services.task_service import TaskService

router = APIRouter(
    prefix="/tasks",
    tags=["Tasks"],
    responses={
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_task(
    payload: TaskCreate,
    ctx: AuthContext = Depends(get_auth_context),
    service: TaskService = Depends(get_task_service_dep),
) -> TaskResponse:
    """Create a new task owned by the caller."""
    task = await service.create(ctx, payload)
    return TaskResponse(message="Task created successfully", task=task)


@router.get(
    "",
    response_model=TaskListResponse,
    responses={400: {"model": ErrorResponse}},
)
async def list_tasks(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    ctx: AuthContext = Depends(get_auth_context),
    service: TaskService = Depends(get_task_service_dep),
) -> TaskListResponse:
    """Fetch the caller's tasks, newest first. Supports ?status= filtering."""
    tasks = await service.list(ctx, status_filter)
    return TaskListResponse(
        message="Tasks fetched successfully",
        count=len(tasks),
        tasks=tasks,
    )


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    ctx: AuthContext = Depends(get_auth_context),
    service: TaskService = Depends(get_task_service_dep),
) -> TaskResponse:
    """Update the supplied fields of one task."""
    task = await service.update(ctx, task_id, payload)
    return TaskResponse(message="Task updated successfully", task=task)


@router.delete(
    "/{task_id}",
    response_model=TaskResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_task(
    task_id: str,
    ctx: AuthContext = Depends(get_auth_context),
    service: TaskService = Depends(get_task_service_dep),
) -> TaskResponse:
    """Delete one task and return its prior state."""
    task = await service.delete(ctx, task_id)
    return TaskResponse(message="Task deleted successfully", task=task)
