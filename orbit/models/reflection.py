from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, JSON
from datetime import datetime
from orbit.core.database import Base


class Reflection(Base):
    __tablename__ = "reflections"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    wins = Column(String, nullable=True)
    struggles = Column(String, nullable=True)
    journal_entry = Column(String, nullable=True)
    mood = Column(String, nullable=True)
    energy = Column(Integer, nullable=True)  # 0-100
    mode = Column(String, nullable=True)
    tags = Column(JSON, nullable=True)

    emotion_label = Column(String, nullable=True)
    cognitive_load = Column(Integer, nullable=True)  # 0-100
    control_rating = Column(Integer, nullable=True)  # 1-5
    clarity_gained = Column(Boolean, nullable=True)  # None = pas répondu
    grounding_strategies = Column(JSON, nullable=True)
