"""Reflection service - création et pagination par curseur"""

from sqlalchemy import or_, and_
from sqlalchemy.orm import Session
from typing import List, Optional, Tuple
from orbit.models.reflection import Reflection

DEFAULT_GROUNDING_STRATEGIES = [
    "Walk", "Nap", "Music", "Meditation",
    "Breathwork", "Stretching", "Conversation", "Quiet time"
]

EMOTION_LABELS = [
    {"value": "overstimulated", "label": "😵‍💫 Overstimulated"},
    {"value": "at_ease", "label": "😌 At Ease"},
    {"value": "focused", "label": "🎯 Focused"},
    {"value": "scattered", "label": "🌪️ Scattered"},
    {"value": "energized", "label": "⚡ Energized"},
    {"value": "drained", "label": "🪫 Drained"},
    {"value": "creative", "label": "🎨 Creative"},
    {"value": "blocked", "label": "🧱 Blocked"}
]


def create_reflection(db: Session, user_id: str, data: dict) -> Reflection:
    reflection = Reflection(user_id=user_id, **data)
    db.add(reflection)
    db.commit()
    db.refresh(reflection)
    return reflection


def get_reflections_page(
    db: Session,
    user_id: str,
    limit: int = 10,
    cursor: Optional[int] = None
) -> Tuple[List[Reflection], Optional[int]]:
    """
    Page de réflexions, plus récentes d'abord.

    Le curseur est l'id du premier élément de la page suivante (inclus).
    On lit limit + 1 lignes : s'il y en a une de trop, son id devient le
    prochain curseur.
    """
    query = db.query(Reflection).filter(Reflection.user_id == user_id)

    if cursor is not None:
        anchor = query.filter(Reflection.id == cursor).first()
        if anchor is None:
            return [], None
        query = query.filter(or_(
            Reflection.created_at < anchor.created_at,
            and_(Reflection.created_at == anchor.created_at, Reflection.id <= anchor.id)
        ))

    rows = query.order_by(Reflection.created_at.desc(), Reflection.id.desc()).limit(limit + 1).all()

    next_cursor = None
    if len(rows) > limit:
        next_cursor = rows.pop().id

    return rows, next_cursor
