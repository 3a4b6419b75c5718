"""Pydantic schemas for task request/response validation."""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional, List

from orbit.schemas.enums import Mode, Mood, Priority, TaskStatus


class Subtask(BaseModel):
    id: str
    title: str
    done: bool = False


class SubtaskCreate(BaseModel):
    """Sous-tâche envoyée par le client, l'id est généré si absent"""
    id: Optional[str] = None
    title: str = Field(min_length=1, max_length=200)
    done: bool = False


class TaskCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    status: TaskStatus = TaskStatus.TODO
    priority: Priority = Priority.MEDIUM
    due_date: Optional[datetime] = None
    estimated_time: Optional[int] = Field(None, ge=0)
    mode: Optional[Mode] = None
    subtasks: Optional[List[SubtaskCreate]] = None
    tags: Optional[List[str]] = None

    model_config = ConfigDict(use_enum_values=True, validate_default=True)


class TaskUpdate(BaseModel):
    """Schema for updating an existing task."""
    
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    status: Optional[TaskStatus] = None
    priority: Optional[Priority] = None
    due_date: Optional[datetime] = None
    estimated_time: Optional[int] = Field(None, ge=0)
    mode: Optional[Mode] = None
    subtasks: Optional[List[SubtaskCreate]] = None
    tags: Optional[List[str]] = None

    model_config = ConfigDict(use_enum_values=True)


class TaskResponse(BaseModel):
    """Schema for task responses from API."""
    
    id: int
    user_id: str
    title: str
    description: Optional[str]
    status: str
    priority: str
    due_date: Optional[datetime]
    estimated_time: Optional[int]
    mode: Optional[str]
    subtasks: Optional[List[Subtask]]
    tags: Optional[List[str]]
    friction: int
    is_ai_generated: bool
    created_at: datetime
    last_updated: Optional[datetime]
    
    model_config = ConfigDict(from_attributes=True)


# Endpoints IA autour des tâches

class SubtaskBreakdownRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)

class SubtaskBreakdownResponse(BaseModel):
    subtasks: List[str]

class ReframeRequest(BaseModel):
    mode: Mode = Mode.BUILD
    mood: Mood = Mood.NEUTRAL

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

class ReframeResponse(BaseModel):
    title: str
    description: str

class SuggestedTaskAccept(BaseModel):
    """Suggestion de l'assistant acceptée par l'utilisateur"""
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    priority: Priority = Priority.MEDIUM
    mode: Optional[Mode] = None

    model_config = ConfigDict(use_enum_values=True, validate_default=True)
