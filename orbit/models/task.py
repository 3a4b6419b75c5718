"""Task model"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, JSON
from datetime import datetime
from orbit.core.database import Base


class Task(Base):
    __tablename__ = "tasks"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    status = Column(String, default="todo", index=True)
    priority = Column(String, default="medium")
    due_date = Column(DateTime, nullable=True, index=True)
    estimated_time = Column(Integer, nullable=True)  # minutes
    mode = Column(String, nullable=True)
    
    subtasks = Column(JSON, nullable=True)  # [{id, title, done}] ordonnés
    tags = Column(JSON, nullable=True)
    friction = Column(Integer, default=0)  # nb de snooze
    is_ai_generated = Column(Boolean, default=False)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    last_updated = Column(DateTime, nullable=True)
