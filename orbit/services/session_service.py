"""
Sessions de mode (Build / Flow / Restore).

Au plus une session ouverte (end_time NULL) par utilisateur : changer de
mode ferme d'abord les sessions ouvertes, puis en ouvre une nouvelle.
"""

import logging
from sqlalchemy.orm import Session
from datetime import datetime, date, timedelta
from typing import Optional, Dict

from orbit.models.focus_session import FocusSession
from orbit.models.reflection import Reflection
from orbit.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_ENERGY = 50


class SessionNotFound(Exception):
    pass


class SessionForbidden(Exception):
    pass


class SessionAlreadyEnded(Exception):
    pass


def end_all_active_sessions(db: Session, user_id: str, energy_end: Optional[int] = None) -> int:
    now = datetime.utcnow()
    sessions = db.query(FocusSession).filter(
        FocusSession.user_id == user_id,
        FocusSession.end_time.is_(None)
    ).all()

    for session in sessions:
        session.end_time = now
        if energy_end is not None:
            session.energy_end = energy_end

    db.commit()
    return len(sessions)


def start_session(
    db: Session,
    user: User,
    mode: str,
    energy_start: int = DEFAULT_ENERGY,
    task_id: Optional[int] = None,
    ending_energy: Optional[int] = None
) -> FocusSession:
    """
    Ferme la session en cours puis ouvre la nouvelle.

    Deux commits successifs, pas une transaction : un crash entre les deux
    laisse l'utilisateur sans session ouverte, jamais avec deux.
    """
    closed = end_all_active_sessions(db, user.id, ending_energy)
    if closed:
        logger.info(f"Closed {closed} open session(s) for user {user.id}")

    session = FocusSession(
        user_id=user.id,
        mode=mode,
        start_time=datetime.utcnow(),
        energy_start=energy_start,
        task_id=task_id
    )
    db.add(session)
    user.last_active = datetime.utcnow()
    db.commit()
    db.refresh(session)
    return session


def end_session(
    db: Session,
    user_id: str,
    session_id: int,
    energy_end: Optional[int] = None,
    end_time: Optional[datetime] = None
) -> FocusSession:
    session = db.query(FocusSession).filter(FocusSession.id == session_id).first()

    if not session:
        raise SessionNotFound(session_id)
    if session.user_id != user_id:
        raise SessionForbidden(session_id)
    if session.end_time is not None:
        raise SessionAlreadyEnded(session_id)

    session.end_time = end_time or datetime.utcnow()
    if energy_end is not None:
        session.energy_end = energy_end

    db.commit()
    db.refresh(session)
    return session


def get_current_session(db: Session, user_id: str) -> Optional[FocusSession]:
    return db.query(FocusSession).filter(
        FocusSession.user_id == user_id,
        FocusSession.end_time.is_(None)
    ).order_by(FocusSession.start_time.desc()).first()


def get_mode_durations(db: Session, user_id: str, now: datetime = None) -> Dict[str, int]:
    """Minutes passées dans chaque mode, une session ouverte compte jusqu'à maintenant"""
    now = now or datetime.utcnow()
    totals: Dict[str, float] = {}

    for session in db.query(FocusSession).filter(FocusSession.user_id == user_id).all():
        end = session.end_time or now
        minutes = max((end - session.start_time).total_seconds(), 0) / 60
        totals[session.mode] = totals.get(session.mode, 0) + minutes

    return {mode: round(minutes) for mode, minutes in totals.items()}


def get_current_streak(db: Session, user_id: str, today: date = None) -> int:
    """
    Nombre de jours actifs consécutifs se terminant aujourd'hui.

    Un jour est actif s'il contient une réflexion ou un début de session.
    """
    today = today or datetime.utcnow().date()

    active_days = set()
    for (created_at,) in db.query(Reflection.created_at).filter(Reflection.user_id == user_id).all():
        active_days.add(created_at.date())
    for (start_time,) in db.query(FocusSession.start_time).filter(FocusSession.user_id == user_id).all():
        active_days.add(start_time.date())

    streak = 0
    day = today
    while day in active_days:
        streak += 1
        day -= timedelta(days=1)
    return streak
