from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from orbit.core.database import get_db
from orbit.core.security import get_current_user
from orbit.models.user import User
from orbit.schemas.enums import Mode, Priority, TaskStatus
from orbit.schemas.task import (
    TaskCreate,
    TaskUpdate,
    TaskResponse,
    SubtaskBreakdownRequest,
    SubtaskBreakdownResponse,
    ReframeRequest,
    ReframeResponse,
    SuggestedTaskAccept,
)
from orbit.services import task_service
from orbit.services.ai_service import generate_task_breakdown, generate_task_reframing

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def get_owned_task(task_id: int, db: Session, current_user: User):
    task = task_service.get_user_task(db, current_user.id, task_id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return task_service.create_task(db, current_user.id, task_data.model_dump())


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    status_filter: Optional[TaskStatus] = Query(None, alias="status"),
    priority: Optional[Priority] = Query(None),
    mode: Optional[Mode] = Query(None),
    tag: Optional[str] = Query(None)
):
    return task_service.list_tasks(
        db,
        current_user.id,
        status=status_filter.value if status_filter else None,
        priority=priority.value if priority else None,
        mode=mode.value if mode else None,
        tag=tag
    )


@router.post("/subtasks", response_model=SubtaskBreakdownResponse)
def breakdown(
    request: SubtaskBreakdownRequest,
    current_user: User = Depends(get_current_user)
):
    """
    Découpe un titre de tâche en sous-tâches avec l'IA.

    Sans clé API ou si l'appel échoue, renvoie les 4 sous-tâches génériques.
    """
    return SubtaskBreakdownResponse(subtasks=generate_task_breakdown(request.title))


@router.post("/suggestions/accept", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def accept_suggestion(
    suggestion: SuggestedTaskAccept,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    # tâche proposée par l'assistant puis acceptée
    return task_service.create_task(db, current_user.id, suggestion.model_dump(), ai_generated=True)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return get_owned_task(task_id, db, current_user)


@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = get_owned_task(task_id, db, current_user)
    return task_service.update_task(db, task, task_data.model_dump(exclude_unset=True))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = get_owned_task(task_id, db, current_user)
    task_service.delete_task(db, task)


@router.post("/{task_id}/snooze", response_model=TaskResponse)
def snooze(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = get_owned_task(task_id, db, current_user)
    return task_service.snooze_task(db, task)


@router.post("/{task_id}/subtasks/{subtask_id}/toggle", response_model=TaskResponse)
def toggle_subtask(
    task_id: int,
    subtask_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = get_owned_task(task_id, db, current_user)
    updated = task_service.toggle_subtask(db, task, subtask_id)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subtask not found")
    return updated


@router.post("/{task_id}/reframe", response_model=ReframeResponse)
def reframe(
    task_id: int,
    request: ReframeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Propose une reformulation, la tâche n'est pas modifiée (le client fait un PATCH s'il l'accepte)"""
    task = get_owned_task(task_id, db, current_user)
    return generate_task_reframing(task.title, task.description, request.mode, request.mood)
