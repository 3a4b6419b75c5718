"""
Router des sessions de mode (BUILD, FLOW, RESTORE).

Toutes les routes demandent un token.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import Optional

from orbit.core.database import get_db
from orbit.core.security import get_current_user
from orbit.models.user import User
from orbit.schemas.session import (
    SessionStart,
    SessionEnd,
    SessionResponse,
    SessionStartResponse,
    ModeStatsResponse,
)
from orbit.services import session_service
from orbit.services.task_service import get_user_task
from orbit.services.personality import get_mode_switch_message

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


@router.post("", response_model=SessionStartResponse, status_code=status.HTTP_201_CREATED)
def start_session(
    request: SessionStart,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Change de mode : ferme la session ouverte et en démarre une nouvelle"""
    if request.task_id is not None and not get_user_task(db, current_user.id, request.task_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

    session = session_service.start_session(
        db,
        current_user,
        request.mode,
        energy_start=request.energy_level,
        task_id=request.task_id,
        ending_energy=request.ending_energy
    )
    return SessionStartResponse(
        session=SessionResponse.model_validate(session),
        greeting=get_mode_switch_message(request.mode)
    )


@router.get("/current", response_model=Optional[SessionResponse])
def current_session(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return session_service.get_current_session(db, current_user.id)


@router.get("/stats", response_model=ModeStatsResponse)
def mode_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return ModeStatsResponse(
        mode_durations=session_service.get_mode_durations(db, current_user.id),
        current_streak=session_service.get_current_streak(db, current_user.id)
    )


@router.post("/{session_id}/end", response_model=SessionResponse)
def end_session(
    session_id: int,
    request: Optional[SessionEnd] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    energy = request.energy_level if request else None
    try:
        return session_service.end_session(db, current_user.id, session_id, energy_end=energy)
    except session_service.SessionNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Focus session not found")
    except session_service.SessionForbidden:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to end this session"
        )
    except session_service.SessionAlreadyEnded:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Session already ended")
