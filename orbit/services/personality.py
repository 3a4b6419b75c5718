"""
Banque de phrases de l'assistant : salutations par mode, réponses aux
réflexions selon l'humeur, relances énergie basse / pas de tâche, nudges.
"""

import random

# ============ SALUTATIONS PAR MODE ============

MODE_GREETINGS = {
    "build": "Build mode activated. Let's focus and move with intent. What's the first step?",
    "flow": "Entering Flow mode. You're in the zone. Stay light, stay deep. I'll keep distractions at bay.",
    "restore": "Restore mode enabled. Time to breathe and come back to center. Gentle focus is key."
}

# ============ RÉFLEXIONS ============

# Version longue, renvoyée après une réflexion enregistrée
REFLECTION_RESPONSES = {
    "positive": "That's a great insight. Acknowledging your progress and positive feelings is key to maintaining momentum.",
    "neutral": "Thanks for sharing that. Taking time to reflect, whatever the feeling, is always valuable.",
    "negative": "It's okay to have challenging moments or feel a bit off. Acknowledging it is the first step. What's one small thing you could do to shift your energy, even slightly?"
}

# Version courte, utilisée par le générateur de messages contextuels
REFLECTION_ACKNOWLEDGEMENTS = {
    "positive": "I'm glad you're feeling positive!",
    "neutral": "Thanks for checking in.",
    "negative": "I'm here to help. Remember to take care of yourself."
}

POSITIVE_MOOD_KEYWORDS = ("happy", "good", "great")
NEGATIVE_MOOD_KEYWORDS = ("sad", "tired", "anxious")

# ============ RELANCES ============

LOW_ENERGY_NOTICE = "I notice your energy is low. Maybe take a short break?"

LOW_ENERGY_PROMPTS = [
    "I sense your energy is a bit low. A short break, even 5 minutes, can make a difference. Or perhaps a less demanding task?",
    "Feeling a bit drained? Gentle movement or a change of scenery might help. We could also find a low-stress task to ease into.",
    "It's perfectly fine to operate at a lower energy sometimes. Would you prefer to switch to Restore mode or tackle a simple, quick task?"
]

# Le premier est la phrase fixe du déclencheur no_task
NO_TASK_PROMPTS = [
    "No tasks in sight. Time to create some or take a well-deserved break?",
    "Looks like your task list is clear for now. Would you like a suggestion for what to focus on next, or perhaps set an intention?",
    "Your canvas is clear! Shall we brainstorm some ideas, or would you prefer to enjoy this moment of quiet focus?"
]

CHAT_NUDGES = [
    "What's on your mind?",
    "How can I assist you right now?",
    "Ready to dive in, or need a moment to map things out?",
    "Is there anything specific you'd like to explore or work on?"
]

TIME_OF_DAY_GREETINGS = {
    "morning": "Good morning! Ready to make the most of the day?",
    "afternoon": "Hope you're having a productive afternoon.",
    "evening": "As the day winds down, what would you like to focus on or wrap up?",
    "night": "Working late? Remember to take care of yourself."
}

DEFAULT_GREETING = "Hello! How can I help you today?"
DEFAULT_MODE_MESSAGE = "Let's get started. What would you like to focus on?"


# ============ FONCTIONS ============

def get_greeting(time_of_day: str = "") -> str:
    return TIME_OF_DAY_GREETINGS.get((time_of_day or "").lower(), DEFAULT_GREETING)


def get_mode_switch_message(mode: str = "") -> str:
    return MODE_GREETINGS.get((mode or "").lower(), DEFAULT_MODE_MESSAGE)


def classify_mood(mood: str = None) -> str:
    """
    Range une humeur (libre ou énumérée) dans positive / neutral / negative.

    Simple recherche de sous-chaînes : "happy", "good", "great" -> positive,
    "sad", "tired", "anxious" -> negative, le reste -> neutral.
    """
    mood_lower = (mood or "neutral").lower()
    if any(word in mood_lower for word in POSITIVE_MOOD_KEYWORDS):
        return "positive"
    if any(word in mood_lower for word in NEGATIVE_MOOD_KEYWORDS):
        return "negative"
    return "neutral"


def get_reflection_response(mood: str = "neutral") -> str:
    return REFLECTION_RESPONSES[classify_mood(mood)]


def get_low_energy_message() -> str:
    return random.choice(LOW_ENERGY_PROMPTS)


def get_no_task_prompt() -> str:
    return random.choice(NO_TASK_PROMPTS)


def get_chat_nudge() -> str:
    return random.choice(CHAT_NUDGES)
