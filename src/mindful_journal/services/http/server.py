from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from ...api import (
    CalendarMonthPayload,
    ChatRequest,
    EntryPayload,
    EntryWriteRequest,
    MessagePayload,
    SelectionPayload,
    SelectionRequest,
    calendar_day,
)
from ...bootstrap import configure_logging
from ...orchestrator import JournalOrchestrator
from ...utils.dates import WEEKDAY_LABELS, days_in_month, format_date_key, month_name, parse_date_key

logger = logging.getLogger(__name__)


def _orchestrator(request: Request) -> JournalOrchestrator:
    return request.app.state.orchestrator


def _parse_day(value: str) -> date:
    try:
        return parse_date_key(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def create_app(orchestrator: JournalOrchestrator) -> FastAPI:
    app = FastAPI(title="Mindful Journal Local API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.orchestrator = orchestrator

    @app.get("/api/entries")
    def list_entries(request: Request) -> Dict[str, Any]:
        entries = _orchestrator(request).entries
        payload = [EntryPayload.from_domain(entries[key]).model_dump() for key in sorted(entries)]
        return {"entries": payload}

    @app.get("/api/entries/{day}")
    def get_entry(day: str, request: Request) -> Dict[str, Any]:
        key = format_date_key(_parse_day(day))
        entry = _orchestrator(request).entries.get(key)
        if entry is None:
            raise HTTPException(status_code=404, detail=f"No entry for {key}")
        return {"entry": EntryPayload.from_domain(entry).model_dump()}

    @app.put("/api/entries/{day}")
    def put_entry(day: str, body: EntryWriteRequest, request: Request) -> Dict[str, Any]:
        target = _parse_day(day)
        entry = _orchestrator(request).save_manual_entry(body.content, day=target)
        logger.debug("Manual entry saved for %s", entry.date)
        return {"entry": EntryPayload.from_domain(entry).model_dump()}

    @app.get("/api/chat")
    def list_messages(request: Request) -> Dict[str, Any]:
        orchestrator = _orchestrator(request)
        return {
            "messages": [MessagePayload.from_domain(message).model_dump() for message in orchestrator.messages],
            "processing": orchestrator.is_processing,
        }

    @app.post("/api/chat")
    def post_message(body: ChatRequest, request: Request) -> Dict[str, Any]:
        if not body.text.strip():
            raise HTTPException(status_code=400, detail="text must not be empty")
        orchestrator = _orchestrator(request)
        reply = orchestrator.send_message(body.text)
        if reply is None:
            logger.warning("Rejected chat submission while another turn is processing")
            raise HTTPException(status_code=409, detail="A chat turn is already being processed.")
        return {
            "reply": MessagePayload.from_domain(reply).model_dump(),
            "selected_date": orchestrator.selected_date_key,
        }

    @app.get("/api/selection")
    def get_selection(request: Request) -> Dict[str, Any]:
        return _selection_payload(_orchestrator(request))

    @app.put("/api/selection")
    def put_selection(body: SelectionRequest, request: Request) -> Dict[str, Any]:
        orchestrator = _orchestrator(request)
        orchestrator.select_date(_parse_day(body.date))
        return _selection_payload(orchestrator)

    @app.get("/api/calendar/{year}/{month}")
    def get_month(year: int, month: int, request: Request) -> Dict[str, Any]:
        if not 1 <= month <= 12:
            raise HTTPException(status_code=400, detail="month must be within 1..12")
        orchestrator = _orchestrator(request)
        entries = orchestrator.entries
        selected = orchestrator.selected_date
        today = date.today()
        days = [
            calendar_day(day, has_entry=day is not None and format_date_key(day) in entries, selected=selected, today=today)
            for day in days_in_month(year, month)
        ]
        payload = CalendarMonthPayload(
            year=year,
            month=month,
            month_name=month_name(month),
            weekdays=list(WEEKDAY_LABELS),
            days=days,
        )
        return payload.model_dump()

    return app


def _selection_payload(orchestrator: JournalOrchestrator) -> Dict[str, Any]:
    entry = orchestrator.current_entry
    payload = SelectionPayload(
        date=orchestrator.selected_date_key,
        entry=EntryPayload.from_domain(entry) if entry else None,
    )
    return payload.model_dump()


def run_local_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    import asyncio

    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    from ..context import ServiceContext

    configure_logging()
    context = ServiceContext()
    app = create_app(context.orchestrator)

    config = Config()
    config.bind = [f"{host}:{port}"]
    logger.info("Serving Mindful Journal API on %s:%s", host, port)
    try:
        asyncio.run(serve(app, config))
    finally:
        context.close()
