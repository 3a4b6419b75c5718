from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from datetime import datetime
from orbit.core.database import Base

class Message(Base):
    __tablename__ = "messages"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    role = Column(String, nullable=False)  # "user" ou "assistant"
    content = Column(String, nullable=False)
    # état de l'utilisateur au moment du message
    context_mode = Column(String, nullable=True)
    context_mood = Column(String, nullable=True)
    context_energy = Column(Integer, nullable=True)
    category = Column(String, nullable=True)  # "chat", "contextual", ...
    related_task_id = Column(Integer, ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True)
    timestamp = Column(DateTime, default=datetime.utcnow, index=True)
