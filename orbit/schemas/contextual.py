"""Schemas des messages contextuels (déclencheur + contexte -> message assistant)."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal, List, Dict, Any

from orbit.schemas.enums import Mode, Trigger, TimeOfDay


class MessageContext(BaseModel):
    """
    État ambiant de l'utilisateur envoyé avec un déclencheur.

    Les champs inconnus sont conservés tels quels (passthrough).
    """
    mode: Optional[Mode] = None
    mood: Optional[str] = None
    energy_level: Optional[int] = Field(None, alias="energyLevel", ge=0, le=100)
    time_of_day: Optional[TimeOfDay] = Field(None, alias="timeOfDay")

    model_config = ConfigDict(populate_by_name=True, extra="allow", use_enum_values=True)


class ContextualMessageRequest(BaseModel):
    trigger: Trigger
    context: Optional[MessageContext] = None
    version: str = "v1"

    model_config = ConfigDict(use_enum_values=True)


class ChatMessage(BaseModel):
    content: str
    role: Literal["assistant"] = "assistant"


class ResponseMetadata(BaseModel):
    trigger: str
    timestamp: str  # ISO-8601


class ContextualMessageResponse(BaseModel):
    version: str
    chat_message: ChatMessage = Field(alias="chatMessage")
    metadata: ResponseMetadata

    model_config = ConfigDict(populate_by_name=True)


class TriggerInfo(BaseModel):
    trigger: str
    default_context: Dict[str, Any] = Field(alias="defaultContext")

    model_config = ConfigDict(populate_by_name=True)


class TriggerListResponse(BaseModel):
    triggers: List[TriggerInfo]


class GreetingResponse(BaseModel):
    message: str
