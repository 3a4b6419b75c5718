import pytest

from orbit.services import personality


@pytest.mark.parametrize("mood,bucket", [
    ("happy", "positive"),
    ("Feeling GREAT today", "positive"),
    ("good", "positive"),
    ("sad", "negative"),
    ("tired", "negative"),
    ("anxious", "negative"),
    ("calm", "neutral"),
    ("stressed", "neutral"),
    (None, "neutral"),
])
def test_classify_mood(mood, bucket):
    assert personality.classify_mood(mood) == bucket


def test_reflection_response_long_form():
    assert personality.get_reflection_response("tired") == personality.REFLECTION_RESPONSES["negative"]
    assert personality.get_reflection_response() == personality.REFLECTION_RESPONSES["neutral"]


def test_mode_switch_message():
    assert personality.get_mode_switch_message("FLOW") == personality.MODE_GREETINGS["flow"]
    assert personality.get_mode_switch_message("recover") == personality.DEFAULT_MODE_MESSAGE


def test_greeting():
    assert personality.get_greeting("morning") == personality.TIME_OF_DAY_GREETINGS["morning"]
    assert personality.get_greeting("teatime") == personality.DEFAULT_GREETING


def test_random_prompts_come_from_their_bank():
    assert personality.get_low_energy_message() in personality.LOW_ENERGY_PROMPTS
    assert personality.get_no_task_prompt() in personality.NO_TASK_PROMPTS
    assert personality.get_chat_nudge() in personality.CHAT_NUDGES


def test_fixed_no_task_phrase_mentions_tasks():
    assert "task" in personality.NO_TASK_PROMPTS[0]
