from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Callable, Optional, Set

logger = logging.getLogger(__name__)


class BackgroundWriter:
    """Runs fire-and-forget persistence calls on a single worker thread.

    One worker keeps writes in submission order. ``flush`` blocks until every
    write submitted so far has finished.
    """

    def __init__(self, *, max_workers: int = 1, thread_name_prefix: str = "journal-writer") -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=thread_name_prefix)
        self._pending: Set[Future] = set()
        self._lock = threading.Lock()

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        future = self._executor.submit(fn, *args, **kwargs)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._finished)
        return future

    def _finished(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("Background write failed: %s", exc, exc_info=exc)

    def flush(self, timeout: Optional[float] = None) -> None:
        with self._lock:
            pending = list(self._pending)
        if pending:
            wait(pending, timeout=timeout)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)


__all__ = ["BackgroundWriter"]
