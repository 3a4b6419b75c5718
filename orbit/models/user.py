from sqlalchemy import Column, String, DateTime
from datetime import datetime
from orbit.core.database import Base

class User(Base):
    __tablename__ = "users"

    # id = "sub" du JWT Supabase (uuid)
    id = Column(String, primary_key=True, index=True)
    email = Column(String, nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    last_active = Column(DateTime, nullable=True)
