from __future__ import annotations

import logging
import threading
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Sequence, Union

from ..assistant import UPDATE_DIARY, AssistantReply
from ..domain import ChatMessage, DiaryEntry, Mood, Role, ToolInvocation
from ..services.storage import JournalStorage
from ..services.writer import BackgroundWriter
from ..utils.dates import format_date_key, parse_date_key
from .state import JournalState

logger = logging.getLogger(__name__)

WELCOME_TEXT = (
    "Hello! I am your personal diary agent. How was your day? "
    "I can help you write your entry for today or find past memories."
)
ERROR_TEXT = "I encountered an error connecting to my services. Please try again."
SAVED_TEMPLATE = "I've saved that entry for {date}."
PROCESSED_TEXT = "I've processed that for you."


class ResponseGenerator(Protocol):
    def generate_response(
        self,
        history: Sequence[ChatMessage],
        entries: Dict[str, DiaryEntry],
        selected_date_key: str,
        user_text: str,
    ) -> AssistantReply:
        ...


class JournalOrchestrator:
    """Owns entries, chat and the selected date; every mutation goes through here.

    Changes are applied to memory first and persisted afterwards. Persistence
    failures are never rolled back. Only one chat turn may run at a time: a
    submission that arrives while a turn is in flight is dropped.
    """

    def __init__(
        self,
        *,
        storage: JournalStorage,
        gateway: ResponseGenerator,
        writer: Optional[BackgroundWriter] = None,
        today: Optional[date] = None,
    ) -> None:
        self.storage = storage
        self.gateway = gateway
        self.writer = writer or BackgroundWriter()
        self._state = JournalState(selected_date=today or date.today())
        self._state_lock = threading.RLock()
        self._turn_lock = threading.Lock()

    # ------------------------------------------------------------------ queries

    @property
    def entries(self) -> Dict[str, DiaryEntry]:
        with self._state_lock:
            return dict(self._state.entries)

    @property
    def messages(self) -> List[ChatMessage]:
        with self._state_lock:
            return list(self._state.messages)

    @property
    def selected_date(self) -> date:
        with self._state_lock:
            return self._state.selected_date

    @property
    def selected_date_key(self) -> str:
        return format_date_key(self.selected_date)

    @property
    def current_entry(self) -> Optional[DiaryEntry]:
        with self._state_lock:
            return self._state.entries.get(format_date_key(self._state.selected_date))

    @property
    def is_processing(self) -> bool:
        with self._state_lock:
            return self._state.processing

    # ------------------------------------------------------------------ lifecycle

    def load(self) -> None:
        entries = self.storage.load_entries()
        messages = self.storage.load_chat()
        if not messages:
            messages = [ChatMessage.create(Role.MODEL, WELCOME_TEXT)]
        with self._state_lock:
            self._state.entries = dict(entries)
            self._state.messages = list(messages)
        logger.info("Loaded %d entries and %d messages from %s storage", len(entries), len(messages), self.storage.name)

    def flush(self, timeout: Optional[float] = None) -> None:
        self.writer.flush(timeout=timeout)

    def close(self) -> None:
        self.writer.flush()
        self.writer.shutdown()

    # ------------------------------------------------------------------ mutations

    def select_date(self, day: Union[date, str]) -> date:
        target = parse_date_key(day) if isinstance(day, str) else day
        with self._state_lock:
            self._state.selected_date = target
        return target

    def save_manual_entry(self, content: str, *, day: Optional[Union[date, str]] = None) -> DiaryEntry:
        """Store ``content`` for ``day`` (the selected date by default) with a neutral mood."""

        if day is None:
            key = self.selected_date_key
        else:
            key = format_date_key(parse_date_key(day) if isinstance(day, str) else day)
        entry = DiaryEntry(date=key, content=content, mood=Mood.NEUTRAL)
        self._apply_entry(entry)
        self._persist(self.storage.save_entry, entry, blocking=self.storage.blocking_writes)
        return entry

    def send_message(self, text: str) -> Optional[ChatMessage]:
        """Run one chat turn and return the assistant message.

        Returns ``None`` without touching state when ``text`` is blank or a
        turn is already being processed.
        """

        text = (text or "").strip()
        if not text:
            return None
        if not self._turn_lock.acquire(blocking=False):
            logger.info("Chat turn already in flight; submission dropped")
            return None

        try:
            with self._state_lock:
                history = list(self._state.messages)
                user_message = ChatMessage.create(Role.USER, text, after=history[-1].timestamp if history else None)
                self._state.messages.append(user_message)
                self._state.processing = True
            self._persist(self.storage.save_message, user_message, blocking=False)

            try:
                reply_text = self._run_turn(history, text)
            except Exception:  # noqa: BLE001
                logger.exception("Chat turn failed")
                reply_text = ERROR_TEXT

            model_message = ChatMessage.create(Role.MODEL, reply_text, after=user_message.timestamp)
            with self._state_lock:
                self._state.messages.append(model_message)
            self._persist(self.storage.save_message, model_message, blocking=True)
            return model_message
        finally:
            with self._state_lock:
                self._state.processing = False
            self._turn_lock.release()

    # ------------------------------------------------------------------ helpers

    def _run_turn(self, history: List[ChatMessage], text: str) -> str:
        with self._state_lock:
            entries = dict(self._state.entries)
            selected_key = format_date_key(self._state.selected_date)

        reply = self.gateway.generate_response(history, entries, selected_key, text)
        written = self._apply_tool_invocations(reply.tool_invocations)

        if reply.text:
            return reply.text
        if written:
            return SAVED_TEMPLATE.format(date=written[0].date)
        return PROCESSED_TEXT

    def _apply_tool_invocations(self, invocations: Iterable[ToolInvocation]) -> List[DiaryEntry]:
        pending: List[DiaryEntry] = []
        for invocation in invocations:
            if invocation.name != UPDATE_DIARY:
                logger.warning("Ignoring unknown tool invocation %r", invocation.name)
                continue
            entry = self._entry_from_invocation(invocation)
            if entry is not None:
                pending.append(entry)

        for entry in pending:
            self._apply_entry(entry)
            self._persist(self.storage.save_entry, entry, blocking=True)
            if entry.date != self.selected_date_key:
                self.select_date(entry.date)
            logger.info("Assistant updated entry %s", entry.date)
        return pending

    def _entry_from_invocation(self, invocation: ToolInvocation) -> Optional[DiaryEntry]:
        args = invocation.args
        raw_date = args.get("date")
        content = args.get("content")
        if not isinstance(raw_date, str) or not isinstance(content, str):
            logger.warning("Skipping %s without date/content: %r", invocation.name, args)
            return None
        try:
            key = format_date_key(parse_date_key(raw_date.strip()))
        except ValueError:
            logger.warning("Skipping %s with invalid date %r", invocation.name, raw_date)
            return None
        mood = Mood.coerce(args.get("mood")) if args.get("mood") else Mood.NEUTRAL
        return DiaryEntry(date=key, content=content, mood=mood)

    def _apply_entry(self, entry: DiaryEntry) -> None:
        with self._state_lock:
            self._state.entries[entry.date] = entry

    def _persist(self, fn: Callable[[Any], None], record: Any, *, blocking: bool) -> None:
        if blocking:
            fn(record)
        else:
            self.writer.submit(fn, record)


__all__ = [
    "ERROR_TEXT",
    "PROCESSED_TEXT",
    "SAVED_TEMPLATE",
    "WELCOME_TEXT",
    "JournalOrchestrator",
    "ResponseGenerator",
]
