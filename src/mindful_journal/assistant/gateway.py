from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence

from openai import OpenAI

from ..config import AppSettings, get_settings
from ..domain import ChatMessage, DiaryEntry, Role, ToolInvocation
from .prompts import EMPTY_INDEX_PLACEHOLDER, SYSTEM_PROMPT_TEMPLATE
from .tools import TOOLS

logger = logging.getLogger(__name__)

FALLBACK_TEXT = "I'm having trouble connecting to my memory right now. Please try again."


@dataclass
class AssistantReply:
    text: str = ""
    tool_invocations: List[ToolInvocation] = field(default_factory=list)

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_invocations)


def build_diary_index(entries: Mapping[str, DiaryEntry], *, max_chars: Optional[int] = None) -> str:
    """Serialize entries newest first, one ``[Date: ..., Content: ...]`` line each."""

    lines = []
    for entry in sorted(entries.values(), key=lambda item: item.date, reverse=True):
        content = entry.content
        if max_chars is not None and max_chars > 0 and len(content) > max_chars:
            content = content[:max_chars].rstrip() + "..."
        lines.append(f"[Date: {entry.date}, Content: {content}]")
    return "\n".join(lines)


def build_system_prompt(
    entries: Mapping[str, DiaryEntry],
    selected_date_key: str,
    *,
    today: Optional[date] = None,
    max_chars: Optional[int] = None,
) -> str:
    index = build_diary_index(entries, max_chars=max_chars) or EMPTY_INDEX_PLACEHOLDER
    return SYSTEM_PROMPT_TEMPLATE.format(
        today=(today or date.today()).strftime("%A, %B %d, %Y"),
        selected_date=selected_date_key,
        diary_index=index,
    )


def _provider_role(role: Role) -> str:
    return "assistant" if role is Role.MODEL else "user"


class AssistantGateway:
    """Single-shot call to the chat model with the diary tool declared.

    Tool requests are returned to the caller, never executed here, and the
    model is not re-invoked with tool results.
    """

    def __init__(self, settings: Optional[AppSettings] = None, *, client: Optional[OpenAI] = None) -> None:
        self.settings = settings or get_settings()
        self._client = client if client is not None else self._build_client()
        self._tools = [spec.as_tool() for spec in TOOLS]

    # ------------------------------------------------------------------ public API

    @property
    def is_available(self) -> bool:
        return self._client is not None

    def generate_response(
        self,
        history: Sequence[ChatMessage],
        entries: Mapping[str, DiaryEntry],
        selected_date_key: str,
        user_text: str,
    ) -> AssistantReply:
        if self._client is None:
            missing = ", ".join(self.settings.llm.missing_env_vars) or "unknown"
            logger.warning("LLM not configured (missing: %s)", missing)
            return AssistantReply(text=FALLBACK_TEXT)

        messages = self.build_messages(history, entries, selected_date_key, user_text)
        try:
            completion = self._client.chat.completions.create(
                model=self.settings.llm.model,
                temperature=self.settings.chat.temperature,
                messages=messages,
                tools=self._tools,
                tool_choice="auto",
            )
            reply = self._parse_completion(completion)
        except Exception:  # noqa: BLE001
            logger.exception("Assistant request failed")
            return AssistantReply(text=FALLBACK_TEXT)

        logger.info(
            "Assistant replied (model=%s, history=%d, tool_calls=%d)",
            self.settings.llm.model,
            len(messages) - 2,
            len(reply.tool_invocations),
        )
        return reply

    def build_messages(
        self,
        history: Sequence[ChatMessage],
        entries: Mapping[str, DiaryEntry],
        selected_date_key: str,
        user_text: str,
    ) -> List[Dict[str, str]]:
        system_prompt = build_system_prompt(
            entries,
            selected_date_key,
            max_chars=self.settings.chat.index_max_chars,
        )
        window = self.settings.chat.history_window
        recent = list(history)[-window:] if window > 0 else []
        return [
            {"role": "system", "content": system_prompt},
            *({"role": _provider_role(message.role), "content": message.text} for message in recent),
            {"role": "user", "content": user_text},
        ]

    # ------------------------------------------------------------------ helpers

    def _build_client(self) -> Optional[OpenAI]:
        if not self.settings.llm.is_configured:
            return None
        default_query = {}
        if self.settings.llm.api_version:
            default_query["api-version"] = self.settings.llm.api_version
        return OpenAI(
            api_key=self.settings.llm.api_key,
            base_url=self.settings.llm.base_url,
            organization=self.settings.llm.organization,
            project=self.settings.llm.project,
            default_query=default_query or None,
        )

    def _parse_completion(self, completion: Any) -> AssistantReply:
        message = completion.choices[0].message
        text = (message.content or "").strip() if isinstance(message.content, str) else ""
        invocations = [
            ToolInvocation(name=call.function.name, args=self._safe_json(call.function.arguments))
            for call in (message.tool_calls or [])
        ]
        return AssistantReply(text=text, tool_invocations=invocations)

    def _safe_json(self, raw: Any) -> Dict[str, Any]:
        if not raw:
            return {}
        if isinstance(raw, dict):
            return raw
        try:
            parsed = json.loads(raw)
            return parsed if isinstance(parsed, dict) else {}
        except (TypeError, json.JSONDecodeError):
            return {}
