"""Fan-out/fan-in task tree on top of a thread pool.

Tasks may spawn further tasks into the same tree and emit results into a
shared queue. Completion is tracked with a pending counter: the consumer
holds one seed token until it starts draining, and the queue is closed with a
sentinel once the counter drops to zero. Parents never wait on their
children, so a bounded pool cannot deadlock.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable, Iterator
from concurrent.futures import ThreadPoolExecutor
from typing import Any

logger = logging.getLogger(__name__)

_DONE = object()


class TaskTree:
    """Spawn tasks that can spawn tasks; drain everything they emit."""

    def __init__(self, max_workers: int | None = None, name: str = "npm-runner") -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=name)
        self._results: queue.SimpleQueue[Any] = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._pending = 1  # seed token, released by drain()
        self._released = False
        self._error: BaseException | None = None

    def __enter__(self) -> TaskTree:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._executor.shutdown(wait=True)

    def spawn(self, fn: Callable[..., None], *args: Any) -> None:
        """Schedule ``fn(*args)`` as an independent task of this tree."""
        with self._lock:
            self._pending += 1
        try:
            self._executor.submit(self._run, fn, args)
        except BaseException:
            self._finish_one()
            raise

    def emit(self, item: Any) -> None:
        self._results.put(item)

    def drain(self) -> Iterator[Any]:
        """Yield emitted items until every spawned task has finished.

        Re-raises the first unexpected exception raised by a task once the
        queue is exhausted.
        """
        if not self._released:
            self._released = True
            self._finish_one()

        while True:
            item = self._results.get()
            if item is _DONE:
                break
            yield item

        if self._error is not None:
            raise self._error

    def _run(self, fn: Callable[..., None], args: tuple[Any, ...]) -> None:
        try:
            fn(*args)
        except Exception as exc:
            logger.exception("Discovery task %s failed", getattr(fn, "__name__", fn))
            with self._lock:
                if self._error is None:
                    self._error = exc
        finally:
            self._finish_one()

    def _finish_one(self) -> None:
        with self._lock:
            self._pending -= 1
            done = self._pending == 0
        if done:
            self._results.put(_DONE)
