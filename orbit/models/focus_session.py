from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from datetime import datetime
from orbit.core.database import Base


class FocusSession(Base):
    __tablename__ = "focus_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    mode = Column(String, nullable=False)
    start_time = Column(DateTime, default=datetime.utcnow, nullable=False)
    end_time = Column(DateTime, nullable=True, index=True)  # NULL = session ouverte
    energy_start = Column(Integer, nullable=True)
    energy_end = Column(Integer, nullable=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True)
