import json

import pytest
import requests

from orbit.core.config import settings
from orbit.services import ai_service
from orbit.services.ai_service import (
    FALLBACK_SUBTASKS,
    FALLBACK_CHAT_RESPONSES,
    FALLBACK_QUOTE,
    generate_task_breakdown,
    generate_chat_response,
    generate_motivational_quote,
    generate_task_reframing,
    build_chat_system_prompt,
)


class FakeResponse:
    def __init__(self, content, status_code=200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return {"choices": [{"message": {"content": self.content}}], "usage": {"total_tokens": 42}}


@pytest.fixture
def llm(monkeypatch):
    """Configure une clé et capture les appels HTTP au LLM"""
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
    calls = []
    replies = []

    def fake_post(url, headers=None, json=None, timeout=None):
        calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        reply = replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    monkeypatch.setattr(ai_service.requests, "post", fake_post)
    return calls, replies


# ========== SANS CLÉ ==========

class TestWithoutKey:

    def test_breakdown_returns_four_fixed_subtasks(self):
        subtasks = generate_task_breakdown("Plan the offsite")
        assert subtasks == FALLBACK_SUBTASKS
        assert len(subtasks) == 4

    def test_breakdown_returns_a_copy(self):
        generate_task_breakdown("A").append("mutated")
        assert len(generate_task_breakdown("B")) == 4

    def test_chat_fallback(self):
        reply = generate_chat_response("hello", {"mode": "build", "mood": "neutral", "energy": 50})
        assert reply["chat_response"] in FALLBACK_CHAT_RESPONSES
        assert reply["suggested_tasks"] == []

    def test_quote_fallback(self):
        assert generate_motivational_quote("flow", "calm") == FALLBACK_QUOTE

    def test_reframe_fallback_keeps_title(self):
        result = generate_task_reframing("Clean inbox", None, "restore", "tired")
        assert result["title"] == "Clean inbox"
        assert result["description"]


# ========== AVEC CLÉ ==========

class TestWithKey:

    def test_breakdown_parses_json(self, llm):
        calls, replies = llm
        replies.append(FakeResponse(json.dumps({"subtasks": ["Open doc", "Write intro", "Send"]})))

        assert generate_task_breakdown("Write post") == ["Open doc", "Write intro", "Send"]
        assert calls[0]["url"] == f"{settings.OPENAI_BASE_URL.rstrip('/')}/chat/completions"
        assert calls[0]["headers"]["Authorization"] == "Bearer sk-test"
        assert calls[0]["json"]["response_format"] == {"type": "json_object"}
        assert calls[0]["timeout"] == settings.LLM_TIMEOUT

    def test_breakdown_caps_at_six(self, llm):
        _, replies = llm
        replies.append(FakeResponse(json.dumps({"subtasks": [f"Step {i}" for i in range(10)]})))
        assert len(generate_task_breakdown("Big project")) == 6

    def test_breakdown_empty_list_falls_back(self, llm):
        _, replies = llm
        replies.append(FakeResponse(json.dumps({"subtasks": []})))
        assert generate_task_breakdown("X") == FALLBACK_SUBTASKS

    def test_breakdown_network_error_falls_back(self, llm):
        _, replies = llm
        replies.append(requests.ConnectionError("boom"))
        assert generate_task_breakdown("X") == FALLBACK_SUBTASKS

    def test_breakdown_http_error_falls_back(self, llm):
        _, replies = llm
        replies.append(FakeResponse("", status_code=500))
        assert generate_task_breakdown("X") == FALLBACK_SUBTASKS

    def test_chat_structured_reply(self, llm):
        _, replies = llm
        replies.append(FakeResponse(json.dumps({
            "chat_response": "Let's start small.",
            "suggested_tasks": [
                {"type": "task", "title": "Stretch", "description": "Two minutes"},
                {"type": "chat_prompt", "title": "What should I do next?"},
                {"type": "task", "title": "Third one is dropped"},
            ]
        })))

        reply = generate_chat_response("I'm stuck", {"mode": "restore", "mood": "tired", "energy": 20})
        assert reply["chat_response"] == "Let's start small."
        assert [s["title"] for s in reply["suggested_tasks"]] == ["Stretch", "What should I do next?"]
        assert reply["suggested_tasks"][1]["type"] == "chat_prompt"

    def test_chat_raw_text_is_kept(self, llm):
        _, replies = llm
        replies.append(FakeResponse("Just breathe for a moment."))

        reply = generate_chat_response("hi", {})
        assert reply == {"chat_response": "Just breathe for a moment.", "suggested_tasks": []}

    def test_quote_truncated_to_fifteen_words(self, llm):
        _, replies = llm
        replies.append(FakeResponse('"' + " ".join(["word"] * 20) + '"'))
        assert len(generate_motivational_quote("build", "happy").split()) == 15

    def test_reframe(self, llm):
        _, replies = llm
        replies.append(FakeResponse(json.dumps({"title": "Clear 10 emails", "description": "Oldest first"})))
        assert generate_task_reframing("Clean inbox", None, "build", "neutral") == {
            "title": "Clear 10 emails", "description": "Oldest first"
        }

    def test_chat_suggestions_not_a_list_are_ignored(self, llm):
        _, replies = llm
        replies.append(FakeResponse(json.dumps({"chat_response": "Sure.", "suggested_tasks": 5})))

        reply = generate_chat_response("hi", {})
        assert reply == {"chat_response": "Sure.", "suggested_tasks": []}

    def test_chat_non_string_description_is_dropped(self, llm):
        _, replies = llm
        replies.append(FakeResponse(json.dumps({
            "chat_response": "Try this.",
            "suggested_tasks": [{"type": "task", "title": "Walk", "description": 5}]
        })))

        reply = generate_chat_response("hi", {})
        assert reply["suggested_tasks"] == [{"type": "task", "title": "Walk", "description": None}]

    def test_chat_reply_not_an_object_keeps_text(self, llm):
        _, replies = llm
        replies.append(FakeResponse(json.dumps(["a", "b"])))

        reply = generate_chat_response("hi", {})
        assert reply["suggested_tasks"] == []
        assert isinstance(reply["chat_response"], str)

    def test_reframe_badly_typed_fields_keep_originals(self, llm):
        _, replies = llm
        replies.append(FakeResponse(json.dumps({"title": 123, "description": ["x"]})))

        result = generate_task_reframing("Clean inbox", "Old notes", "build", "neutral")
        assert result == {"title": "Clean inbox", "description": "Old notes"}

    def test_reframe_not_an_object_falls_back(self, llm):
        _, replies = llm
        replies.append(FakeResponse(json.dumps("Just do it")))

        result = generate_task_reframing("Clean inbox", None, "build", "neutral")
        assert result["title"] == "Clean inbox"
        assert isinstance(result["description"], str)


# ========== PROMPT ==========

def test_system_prompt_describes_context():
    prompt = build_chat_system_prompt({
        "mode": "restore",
        "mood": "stressed",
        "energy": 15,
        "tasks": [{"title": "Taxes", "status": "blocked", "priority": "urgent", "description": "x" * 150}]
    })
    assert "Mode: restore" in prompt
    assert "Energy level: 15/100" in prompt
    assert "very low energy" in prompt
    assert "- Taxes [status: blocked, priority: urgent]: " + "x" * 100 + "..." in prompt


def test_system_prompt_without_tasks():
    assert "no tasks right now" in build_chat_system_prompt({})
