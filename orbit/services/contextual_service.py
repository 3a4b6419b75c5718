"""
Génération des messages contextuels de l'assistant.

Un déclencheur (changement de mode, réflexion enregistrée, énergie basse,
liste de tâches vide, ouverture du chat) + le contexte ambiant de
l'utilisateur -> une phrase tirée de la banque de personnalité.
"""

from datetime import datetime
from typing import Optional, List, Union

from orbit.schemas.enums import Trigger
from orbit.schemas.contextual import (
    MessageContext,
    ContextualMessageRequest,
    ContextualMessageResponse,
    ChatMessage,
    ResponseMetadata,
)
from orbit.services import personality

DEFAULT_VERSION = "v1"

DEFAULT_CONTEXTS = {
    Trigger.MODE_CHANGE.value: {"mode": "build"},
    Trigger.REFLECTION_LOGGED.value: {"mood": "neutral"},
    Trigger.ENERGY_LOW.value: {"energyLevel": 30},
    Trigger.NO_TASK.value: {},
    Trigger.CHAT_OPENED.value: {"timeOfDay": "afternoon"},
}


def get_time_of_day(now: datetime = None) -> str:
    hour = (now or datetime.now()).hour

    if hour < 12:
        return "morning"
    if hour < 17:
        return "afternoon"
    if hour < 21:
        return "evening"
    return "night"


def _as_value(value) -> Optional[str]:
    # accepte un enum ou une chaîne
    return getattr(value, "value", value)


def _as_context(context: Union[MessageContext, dict, None]) -> MessageContext:
    if context is None:
        return MessageContext()
    if isinstance(context, dict):
        return MessageContext.model_validate(context)
    return context


def generate_contextual_message_v1(trigger: Union[Trigger, str], context=None) -> str:
    ctx = _as_context(context)
    trigger = _as_value(trigger)
    nudge = personality.get_chat_nudge

    if trigger == Trigger.MODE_CHANGE.value:
        mode = _as_value(ctx.mode)
        if mode:
            return f"Switching to {mode} mode. {nudge()}"
        return f"Changing modes. {nudge()}"

    if trigger == Trigger.REFLECTION_LOGGED.value:
        bucket = personality.classify_mood(ctx.mood)
        return f"{personality.REFLECTION_ACKNOWLEDGEMENTS[bucket]} {nudge()}"

    if trigger == Trigger.ENERGY_LOW.value:
        # la valeur d'énergie n'influe pas sur le message
        return f"{personality.LOW_ENERGY_NOTICE} {nudge()}"

    if trigger == Trigger.NO_TASK.value:
        return personality.NO_TASK_PROMPTS[0]

    if trigger == Trigger.CHAT_OPENED.value:
        time_of_day = _as_value(ctx.time_of_day) or get_time_of_day()
        return f"Good {time_of_day}! {nudge()}"

    return nudge()


def generate_contextual_message(trigger: Union[Trigger, str], context=None) -> str:
    return generate_contextual_message_v1(trigger, context)


def handle_contextual_message_request(request: ContextualMessageRequest) -> ContextualMessageResponse:
    """
    Construit la réponse complète pour POST /api/contextual-message.

    Seule la v1 existe : toute autre version retombe sur la v1 mais la
    version demandée est renvoyée telle quelle.
    """
    version = request.version or DEFAULT_VERSION

    message = generate_contextual_message_v1(request.trigger, request.context)

    return ContextualMessageResponse(
        version=version,
        chat_message=ChatMessage(content=message),
        metadata=ResponseMetadata(
            trigger=_as_value(request.trigger),
            timestamp=datetime.utcnow().isoformat() + "Z",
        ),
    )


def get_available_triggers() -> List[str]:
    return [trigger.value for trigger in Trigger]


def get_default_context(trigger: Union[Trigger, str]) -> dict:
    return dict(DEFAULT_CONTEXTS.get(_as_value(trigger), {}))
