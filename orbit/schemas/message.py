from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional, List, Literal

from orbit.schemas.enums import Mode, Mood

class TaskSummary(BaseModel):
    """Tâche telle que le client la résume pour le prompt du chat"""
    title: str
    status: str = "todo"
    priority: str = "medium"
    description: Optional[str] = None

class ChatRequest(BaseModel):
    content: str = Field(min_length=1, max_length=4000)
    mode: Mode = Mode.BUILD
    mood: Mood = Mood.NEUTRAL
    energy: int = Field(50, ge=0, le=100)
    tasks: Optional[List[TaskSummary]] = None  # None = prendre les tâches en base
    related_task_id: Optional[int] = None

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

class SuggestedTask(BaseModel):
    type: Literal["task", "chat_prompt"] = "task"
    title: str
    description: Optional[str] = None

class MessageResponse(BaseModel):
    id: int
    role: str
    content: str
    context_mode: Optional[str]
    context_mood: Optional[str]
    context_energy: Optional[int]
    category: Optional[str]
    related_task_id: Optional[int]
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)

class ChatResponse(BaseModel):
    assistant_message: MessageResponse = Field(alias="assistantMessage")
    suggested_tasks: List[SuggestedTask] = Field(default_factory=list, alias="suggestedTasks")

    model_config = ConfigDict(populate_by_name=True)

class QuoteRequest(BaseModel):
    mode: Mode = Mode.BUILD
    mood: Mood = Mood.NEUTRAL

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

class QuoteResponse(BaseModel):
    quote: str
