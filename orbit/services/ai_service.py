"""
Adaptateur LLM - appels HTTP à une API chat-completions compatible OpenAI.

Chaque fonction fait exactement un appel, sans retry. Toute erreur (pas de
clé, réseau, JSON invalide...) est loggée et remplacée par un contenu
statique : l'appelant ne reçoit jamais d'exception.
"""

import json
import logging
import random
from datetime import datetime
from typing import Optional, List, Dict, Any

import requests

from orbit.core.config import settings

logger = logging.getLogger(__name__)

FALLBACK_SUBTASKS = [
    "Research and gather requirements",
    "Create initial draft or outline",
    "Review and refine content",
    "Finalize and deliver"
]

FALLBACK_CHAT_RESPONSES = [
    "I'm having trouble connecting right now, but I'm still here. What's the smallest next step you could take?",
    "Sorry, I couldn't put together a proper answer just now. Want to try again in a moment?"
]

FALLBACK_QUOTE = "Progress over perfection."

FALLBACK_REFRAME_DESCRIPTION = "Start with the smallest first step you can finish in a few minutes."

MAX_SUGGESTIONS = 2
DESCRIPTION_PREVIEW_CHARS = 100


class LLMUnavailable(Exception):
    """Pas de clé API configurée"""


# ============ DESCRIPTIONS DU CONTEXTE ============

MODE_DESCRIPTIONS = {
    "build": "User is focused on making progress and completing tasks. Be direct, action-oriented, and encouraging.",
    "flow": "User is in a state of deep focus. Keep replies light and short, and avoid pulling them out of the zone.",
    "restore": "User needs support during low energy/motivation periods. Be gentle, validating, and suggest small, achievable actions."
}

MOOD_DESCRIPTIONS = {
    "happy": "User is feeling good. Match their warmth and help them use it.",
    "energized": "User is feeling energized. Channel that energy without encouraging burnout.",
    "motivated": "User is feeling driven and positive. Match their enthusiasm and channel it productively.",
    "calm": "User is feeling balanced and collected. Maintain this state with measured, thoughtful responses.",
    "neutral": "User is feeling neutral. Offer balanced guidance.",
    "tired": "User is tired. Favour rest and minimal-effort actions.",
    "stressed": "User is feeling overwhelmed or pressured. Use calming language and help reduce cognitive load.",
    "anxious": "User is feeling anxious. Be reassuring and keep suggestions very concrete.",
    "sad": "User is feeling down. Lead with empathy before any suggestion."
}


def describe_mode(mode: str) -> str:
    return MODE_DESCRIPTIONS.get(mode, MODE_DESCRIPTIONS["build"])


def describe_mood(mood: str) -> str:
    return MOOD_DESCRIPTIONS.get(mood, MOOD_DESCRIPTIONS["neutral"])


def describe_energy(energy: int) -> str:
    if energy < 30:
        return "User has very low energy. Suggest minimal effort actions and validate their need to rest."
    if energy < 70:
        return "User has moderate energy. Suggest balanced activities that won't deplete them."
    return "User has high energy. Help them channel this productively without burning out."


# ============ APPEL HTTP ============

def is_llm_configured() -> bool:
    return bool(settings.OPENAI_API_KEY)


def _chat_completion(messages: List[Dict[str, str]], json_mode: bool = False) -> str:
    if not is_llm_configured():
        raise LLMUnavailable("OPENAI_API_KEY is not set")

    body = {"model": settings.OPENAI_MODEL, "messages": messages}
    if json_mode:
        body["response_format"] = {"type": "json_object"}

    start_time = datetime.utcnow()

    response = requests.post(
        f"{settings.OPENAI_BASE_URL.rstrip('/')}/chat/completions",
        headers={"Authorization": f"Bearer {settings.OPENAI_API_KEY}"},
        json=body,
        timeout=settings.LLM_TIMEOUT
    )
    response.raise_for_status()
    data = response.json()

    content = (data["choices"][0]["message"].get("content") or "").strip()
    elapsed_ms = int((datetime.utcnow() - start_time).total_seconds() * 1000)
    tokens = data.get("usage", {}).get("total_tokens", 0)
    logger.debug(f"LLM call ok: {tokens} tokens in {elapsed_ms}ms")

    if not content:
        raise ValueError("Empty completion")
    return content


# ============ OPÉRATIONS ============

def generate_task_breakdown(title: str) -> List[str]:
    """Découpe une tâche en 4-6 sous-tâches, de la plus facile à la plus longue."""
    messages = [
        {
            "role": "system",
            "content": (
                "You are an emotionally intelligent productivity assistant that breaks complex tasks "
                "into smaller, actionable subtasks.\n"
                "1. Create 4-6 specific, actionable subtasks directly related to the main task\n"
                "2. Start with an easy quick win that takes under 10 minutes\n"
                "3. Order subtasks from easiest/quickest to most complex\n"
                "4. Each subtask should feel achievable in a single work session\n"
                "5. Use simple, direct language without explanation\n"
                'Reply with a JSON object: {"subtasks": ["..."]}'
            )
        },
        {"role": "user", "content": f'Task: "{title}"'}
    ]

    try:
        content = json.loads(_chat_completion(messages, json_mode=True))
        subtasks = [str(s).strip() for s in content.get("subtasks", []) if str(s).strip()]
        if not subtasks:
            raise ValueError("No subtasks in completion")
        return subtasks[:6]
    except LLMUnavailable:
        logger.warning("LLM API key not found. Using fallback subtasks.")
    except Exception as e:
        logger.error(f"Error generating task breakdown: {e}")

    return list(FALLBACK_SUBTASKS)


def _format_tasks(tasks: List[Dict[str, Any]]) -> str:
    if not tasks:
        return "The user has no tasks right now."

    lines = []
    for task in tasks:
        line = f"- {task.get('title')} [status: {task.get('status', 'todo')}, priority: {task.get('priority', 'medium')}]"
        description = task.get("description")
        if description:
            if len(description) > DESCRIPTION_PREVIEW_CHARS:
                description = description[:DESCRIPTION_PREVIEW_CHARS] + "..."
            line += f": {description}"
        lines.append(line)
    return "\n".join(lines)


def build_chat_system_prompt(context: Dict[str, Any]) -> str:
    mode = context.get("mode", "build")
    mood = context.get("mood", "neutral")
    energy = context.get("energy", 50)

    return f"""You are Orbit, an emotionally intelligent productivity assistant.

Current user context:
- Mode: {mode} ({describe_mode(mode)})
- Mood: {mood} ({describe_mood(mood)})
- Energy level: {energy}/100 ({describe_energy(energy)})

Current tasks:
{_format_tasks(context.get("tasks") or [])}

Respond in a supportive tone that matches their mood and energy. Keep the response to 2-4 sentences
and always acknowledge their current state before offering a suggestion.
You may suggest at most {MAX_SUGGESTIONS} follow-ups: either a new task or a prompt the user could send next.

Reply with a JSON object:
{{"chat_response": "...", "suggested_tasks": [{{"type": "task" | "chat_prompt", "title": "...", "description": "..."}}]}}"""


def _parse_suggestions(raw) -> List[Dict[str, Any]]:
    if not isinstance(raw, list):
        return []
    suggestions = []
    for item in raw:
        if not isinstance(item, dict) or not item.get("title"):
            continue
        suggestion_type = item.get("type") if item.get("type") in ("task", "chat_prompt") else "task"
        description = item.get("description")
        suggestions.append({
            "type": suggestion_type,
            "title": str(item["title"]),
            "description": description if isinstance(description, str) else None
        })
    return suggestions[:MAX_SUGGESTIONS]


def generate_chat_response(message: str, context: Dict[str, Any]) -> Dict[str, Any]:
    """
    Réponse de l'assistant à un message du chat.

    context: mode, mood, energy, tasks (liste de dicts title/status/priority/description)
    Retour: {"chat_response": str, "suggested_tasks": [...]}
    """
    messages = [
        {"role": "system", "content": build_chat_system_prompt(context)},
        {"role": "user", "content": message}
    ]

    try:
        text = _chat_completion(messages, json_mode=True)
    except LLMUnavailable:
        logger.warning("LLM API key not found. Using fallback chat response.")
        return {"chat_response": random.choice(FALLBACK_CHAT_RESPONSES), "suggested_tasks": []}
    except Exception as e:
        logger.error(f"Error generating chat response: {e}")
        return {"chat_response": random.choice(FALLBACK_CHAT_RESPONSES), "suggested_tasks": []}

    try:
        content = json.loads(text)
        reply = content.get("chat_response")
        if not isinstance(reply, str) or not reply.strip():
            raise ValueError("Missing chat_response")
        return {"chat_response": reply.strip(), "suggested_tasks": _parse_suggestions(content.get("suggested_tasks"))}
    except (ValueError, AttributeError, TypeError) as e:
        # le modèle n'a pas respecté le format, on garde le texte brut
        logger.info(f"Chat completion was not structured JSON: {e}")
        return {"chat_response": text, "suggested_tasks": []}


def generate_motivational_quote(mode: str, mood: str) -> str:
    messages = [
        {
            "role": "system",
            "content": (
                "You create concise, emotionally intelligent motivational quotes tailored to the user's "
                "current state. Maximum 15 words. Avoid toxic positivity. Reply with the quote only."
            )
        },
        {
            "role": "user",
            "content": f"Create a short quote for someone feeling {mood} in {mode} mode ({describe_mode(mode)})."
        }
    ]

    try:
        quote = _chat_completion(messages).strip().strip('"')
        if len(quote.split()) > 15:
            quote = " ".join(quote.split()[:15])
        return quote or FALLBACK_QUOTE
    except LLMUnavailable:
        logger.warning("LLM API key not found. Using fallback quote.")
    except Exception as e:
        logger.error(f"Error generating motivational quote: {e}")

    return FALLBACK_QUOTE


def generate_task_reframing(title: str, description: Optional[str], mode: str, mood: str) -> Dict[str, str]:
    """Reformule une tâche pour la rendre plus abordable vu le mode et l'humeur."""
    messages = [
        {
            "role": "system",
            "content": (
                "You reframe tasks to make them more approachable and motivating. Make them specific, "
                "start from a clear first step and reduce emotional friction.\n"
                f"The user is in {mode} mode ({describe_mode(mode)}) and feels {mood} ({describe_mood(mood)}).\n"
                'Reply with a JSON object: {"title": "...", "description": "..."}'
            )
        },
        {
            "role": "user",
            "content": f"Title: {title}\nDescription: {description or 'No description provided'}"
        }
    ]

    try:
        content = json.loads(_chat_completion(messages, json_mode=True))
        if not isinstance(content, dict):
            raise ValueError("Reframing is not a JSON object")
        new_title = content.get("title")
        new_description = content.get("description")
        # champs mal typés : on garde les valeurs d'origine
        if not isinstance(new_title, str) or not new_title.strip():
            new_title = title
        if not isinstance(new_description, str) or not new_description.strip():
            new_description = description or FALLBACK_REFRAME_DESCRIPTION
        return {"title": new_title, "description": new_description}
    except LLMUnavailable:
        logger.warning("LLM API key not found. Using fallback reframing.")
    except Exception as e:
        logger.error(f"Error generating task reframing: {e}")

    return {"title": title, "description": FALLBACK_REFRAME_DESCRIPTION}
