from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from orbit.core.database import get_db
from orbit.core.security import get_current_user
from orbit.models.user import User
from orbit.schemas.reflection import ReflectionCreate, ReflectionResponse, ReflectionPage, EmotionLabel
from orbit.services.reflection_service import (
    create_reflection,
    get_reflections_page,
    DEFAULT_GROUNDING_STRATEGIES,
    EMOTION_LABELS
)

router = APIRouter(prefix="/api", tags=["reflections"])


@router.post("/reflections", response_model=ReflectionResponse, status_code=status.HTTP_201_CREATED)
def add_reflection(
    reflection_data: ReflectionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return create_reflection(db, current_user.id, reflection_data.model_dump())


@router.get("/reflections", response_model=ReflectionPage)
def list_reflections(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    limit: int = Query(10, ge=1, le=50),
    cursor: Optional[int] = Query(None)
):
    """
    Réflexions paginées, plus récentes d'abord.

    GET /api/reflections?limit=10
    → {"items": [...], "nextCursor": 42}
    GET /api/reflections?limit=10&cursor=42
    → page suivante, commence à la réflexion 42
    """
    items, next_cursor = get_reflections_page(db, current_user.id, limit=limit, cursor=cursor)
    return ReflectionPage(
        items=[ReflectionResponse.model_validate(r) for r in items],
        next_cursor=next_cursor
    )


@router.get("/constants/emotion-labels", response_model=List[EmotionLabel])
def emotion_labels():
    return EMOTION_LABELS


@router.get("/constants/grounding-strategies", response_model=List[str])
def grounding_strategies():
    return DEFAULT_GROUNDING_STRATEGIES
