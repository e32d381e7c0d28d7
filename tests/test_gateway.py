"""Tests for AssistantGateway."""

import json
from datetime import date
from unittest.mock import MagicMock

import pytest

from conftest import make_settings
from mindful_journal.assistant import (
    FALLBACK_TEXT,
    UPDATE_DIARY_TOOL,
    AssistantGateway,
    build_diary_index,
    build_system_prompt,
)
from mindful_journal.domain import ChatMessage, DiaryEntry, Role


def make_mock_response(content: str = None, tool_calls: list = None):
    """Create a mock chat completion."""
    message = MagicMock()
    message.content = content
    message.tool_calls = tool_calls

    choice = MagicMock()
    choice.message = message

    response = MagicMock()
    response.choices = [choice]
    return response


def make_tool_call(name: str, arguments: str = "{}"):
    """Create a mock tool call."""
    tc = MagicMock()
    tc.function = MagicMock()
    tc.function.name = name
    tc.function.arguments = arguments
    return tc


def history(count: int) -> list:
    return [
        ChatMessage(id=str(i), role=Role.USER if i % 2 == 0 else Role.MODEL, text=f"msg {i}", timestamp=i)
        for i in range(count)
    ]


@pytest.fixture
def client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def gateway(tmp_path, client) -> AssistantGateway:
    return AssistantGateway(make_settings(tmp_path), client=client)


class TestDiaryIndex:
    """Tests for serializing the diary into the prompt."""

    def test_newest_first(self):
        entries = {
            "2024-01-01": DiaryEntry(date="2024-01-01", content="New year"),
            "2024-03-10": DiaryEntry(date="2024-03-10", content="Walk"),
        }
        assert build_diary_index(entries) == (
            "[Date: 2024-03-10, Content: Walk]\n[Date: 2024-01-01, Content: New year]"
        )

    def test_truncates_long_content(self):
        entries = {"2024-01-01": DiaryEntry(date="2024-01-01", content="abcdefghij")}
        assert build_diary_index(entries, max_chars=4) == "[Date: 2024-01-01, Content: abcd...]"

    def test_system_prompt_embeds_context(self):
        entries = {"2024-03-09": DiaryEntry(date="2024-03-09", content="Rainy")}
        prompt = build_system_prompt(entries, "2024-03-10", today=date(2024, 3, 11))

        assert "Monday, March 11, 2024" in prompt
        assert "Currently viewing/editing date: 2024-03-10" in prompt
        assert "[Date: 2024-03-09, Content: Rainy]" in prompt

    def test_empty_index_placeholder(self):
        assert "(no entries yet)" in build_system_prompt({}, "2024-03-10")


class TestToolSchema:
    """Tests for the declared diary tool."""

    def test_update_diary_schema(self):
        tool = UPDATE_DIARY_TOOL.as_tool()

        assert tool["type"] == "function"
        assert tool["function"]["name"] == "updateDiary"
        parameters = tool["function"]["parameters"]
        assert parameters["required"] == ["date", "content"]
        assert set(parameters["properties"]["mood"]["enum"]) == {"happy", "neutral", "sad", "excited", "calm"}


class TestGenerateResponse:
    """Tests for the model round-trip."""

    def test_returns_text(self, gateway, client):
        client.chat.completions.create.return_value = make_mock_response(content="  How was it?  ")

        reply = gateway.generate_response([], {}, "2024-03-10", "Hi")

        assert reply.text == "How was it?"
        assert reply.tool_invocations == []

    def test_sends_window_and_tools(self, tmp_path, client):
        gateway = AssistantGateway(make_settings(tmp_path, history_window=3), client=client)
        client.chat.completions.create.return_value = make_mock_response(content="ok")

        gateway.generate_response(history(5), {}, "2024-03-10", "Latest")

        kwargs = client.chat.completions.create.call_args.kwargs
        messages = kwargs["messages"]
        assert messages[0]["role"] == "system"
        assert [m["content"] for m in messages[1:]] == ["msg 2", "msg 3", "msg 4", "Latest"]
        assert [m["role"] for m in messages[1:]] == ["user", "assistant", "user", "user"]
        assert kwargs["model"] == "test-model"
        assert kwargs["temperature"] == 0.7
        assert kwargs["tools"] == [UPDATE_DIARY_TOOL.as_tool()]

    def test_zero_window_sends_no_history(self, tmp_path, client):
        gateway = AssistantGateway(make_settings(tmp_path, history_window=0), client=client)
        client.chat.completions.create.return_value = make_mock_response(content="ok")

        gateway.generate_response(history(4), {}, "2024-03-10", "Only this")

        messages = client.chat.completions.create.call_args.kwargs["messages"]
        assert [m["role"] for m in messages] == ["system", "user"]
        assert messages[1]["content"] == "Only this"

    def test_extracts_all_tool_calls(self, gateway, client):
        calls = [
            make_tool_call("updateDiary", json.dumps({"date": "2024-03-10", "content": "A", "mood": "calm"})),
            make_tool_call("updateDiary", json.dumps({"date": "2024-03-09", "content": "B"})),
        ]
        client.chat.completions.create.return_value = make_mock_response(content=None, tool_calls=calls)

        reply = gateway.generate_response([], {}, "2024-03-10", "Write both")

        assert reply.text == ""
        assert reply.has_tool_calls
        assert [inv.args["content"] for inv in reply.tool_invocations] == ["A", "B"]
        assert reply.tool_invocations[0].name == "updateDiary"

    def test_malformed_arguments_decode_to_empty_mapping(self, gateway, client):
        calls = [make_tool_call("updateDiary", "{not json")]
        client.chat.completions.create.return_value = make_mock_response(tool_calls=calls)

        reply = gateway.generate_response([], {}, "2024-03-10", "Write")

        assert reply.tool_invocations[0].args == {}

    def test_api_failure_returns_fallback(self, gateway, client):
        client.chat.completions.create.side_effect = RuntimeError("network down")

        reply = gateway.generate_response([], {}, "2024-03-10", "Hi")

        assert reply.text == FALLBACK_TEXT
        assert reply.tool_invocations == []

    def test_unconfigured_client_returns_fallback(self, tmp_path):
        gateway = AssistantGateway(make_settings(tmp_path, api_key=None))

        assert not gateway.is_available
        reply = gateway.generate_response([], {}, "2024-03-10", "Hi")
        assert reply.text == FALLBACK_TEXT
