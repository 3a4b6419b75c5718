"""
Router des messages contextuels.

Endpoints:
- POST /api/contextual-message - message assistant pour un déclencheur
- GET /api/contextual-message/triggers - déclencheurs + contexte par défaut
- GET /api/contextual-message/greeting - salutation selon le moment de la journée
- GET /api/contextual-message/prompts/{low-energy,no-task,reflection} - phrases de la banque
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from orbit.core.security import get_current_user
from orbit.models.user import User
from orbit.schemas.enums import TimeOfDay
from orbit.schemas.contextual import (
    ContextualMessageRequest,
    ContextualMessageResponse,
    TriggerInfo,
    TriggerListResponse,
    GreetingResponse,
)
from orbit.services.contextual_service import (
    handle_contextual_message_request,
    get_available_triggers,
    get_default_context,
    get_time_of_day,
)
from orbit.services.personality import (
    get_greeting,
    get_low_energy_message,
    get_no_task_prompt,
    get_reflection_response,
)

router = APIRouter(prefix="/api/contextual-message", tags=["contextual"])


@router.post("", response_model=ContextualMessageResponse)
def contextual_message(
    request: ContextualMessageRequest,
    current_user: User = Depends(get_current_user)
):
    """
    exemple:
    POST /api/contextual-message
    {"trigger": "mode_change", "context": {"mode": "build"}}
    →
    {
      "version": "v1",
      "chatMessage": {"content": "Switching to build mode. ...", "role": "assistant"},
      "metadata": {"trigger": "mode_change", "timestamp": "..."}
    }
    """
    return handle_contextual_message_request(request)


@router.get("/triggers", response_model=TriggerListResponse)
def triggers(current_user: User = Depends(get_current_user)):
    return TriggerListResponse(triggers=[
        TriggerInfo(trigger=trigger, default_context=get_default_context(trigger))
        for trigger in get_available_triggers()
    ])


@router.get("/greeting", response_model=GreetingResponse)
def greeting(
    time_of_day: Optional[TimeOfDay] = Query(None),
    current_user: User = Depends(get_current_user)
):
    moment = time_of_day.value if time_of_day else get_time_of_day()
    return GreetingResponse(message=get_greeting(moment))


@router.get("/prompts/low-energy", response_model=GreetingResponse)
def low_energy_prompt(current_user: User = Depends(get_current_user)):
    return GreetingResponse(message=get_low_energy_message())


@router.get("/prompts/no-task", response_model=GreetingResponse)
def no_task_prompt(current_user: User = Depends(get_current_user)):
    return GreetingResponse(message=get_no_task_prompt())


@router.get("/prompts/reflection", response_model=GreetingResponse)
def reflection_prompt(
    mood: Optional[str] = Query(None, max_length=50),
    current_user: User = Depends(get_current_user)
):
    """Réponse longue à une réflexion, selon la catégorie de l'humeur (texte libre accepté)"""
    return GreetingResponse(message=get_reflection_response(mood))
