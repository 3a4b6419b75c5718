# schemas/enums.py

from enum import Enum

class Mode(str, Enum):
    BUILD = "build"
    FLOW = "flow"
    RESTORE = "restore"

class Mood(str, Enum):
    HAPPY = "happy"
    ENERGIZED = "energized"
    MOTIVATED = "motivated"
    CALM = "calm"
    NEUTRAL = "neutral"
    TIRED = "tired"
    STRESSED = "stressed"
    ANXIOUS = "anxious"
    SAD = "sad"

class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"
    BLOCKED = "blocked"
    PENDING = "pending"

class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

class Trigger(str, Enum):
    MODE_CHANGE = "mode_change"
    REFLECTION_LOGGED = "reflection_logged"
    ENERGY_LOW = "energy_low"
    NO_TASK = "no_task"
    CHAT_OPENED = "chat_opened"

class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"

class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
