from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional, List

from orbit.schemas.enums import Mode, Mood

# Schemas réflexions

class ReflectionCreate(BaseModel):
    wins: Optional[str] = Field(None, max_length=5000)
    struggles: Optional[str] = Field(None, max_length=5000)
    journal_entry: Optional[str] = Field(None, max_length=10000)
    mood: Optional[Mood] = None
    energy: Optional[int] = Field(None, ge=0, le=100)
    mode: Optional[Mode] = None
    tags: Optional[List[str]] = None
    emotion_label: Optional[str] = None
    cognitive_load: Optional[int] = Field(None, ge=0, le=100)
    control_rating: Optional[int] = Field(None, ge=1, le=5)
    clarity_gained: Optional[bool] = None
    grounding_strategies: Optional[List[str]] = None

    model_config = ConfigDict(use_enum_values=True)

class ReflectionResponse(BaseModel):
    id: int
    user_id: str
    created_at: datetime
    wins: Optional[str]
    struggles: Optional[str]
    journal_entry: Optional[str]
    mood: Optional[str]
    energy: Optional[int]
    mode: Optional[str]
    tags: Optional[List[str]]
    emotion_label: Optional[str]
    cognitive_load: Optional[int]
    control_rating: Optional[int]
    clarity_gained: Optional[bool]
    grounding_strategies: Optional[List[str]]

    model_config = ConfigDict(from_attributes=True)

class ReflectionPage(BaseModel):
    items: List[ReflectionResponse]
    next_cursor: Optional[int] = Field(None, alias="nextCursor")

    model_config = ConfigDict(populate_by_name=True)

class EmotionLabel(BaseModel):
    value: str
    label: str
