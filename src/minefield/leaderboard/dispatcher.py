from __future__ import annotations

import logging
import queue
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[BaseException], Any], None]


class CallbackDispatcher:
    """Runs blocking jobs on worker threads and hands results back on the UI thread.

    Completions are queued before the job's future resolves, so once a caller
    has seen the future finish, the next ``pump()`` is guaranteed to deliver
    the callback.
    """

    def __init__(self, max_workers: int = 2):
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="leaderboard")
        self._completed: "queue.SimpleQueue[Tuple[Callback, Optional[BaseException], Any]]" = queue.SimpleQueue()

    def submit(self, job: Callable[[], Any], callback: Callback | None = None) -> Future:
        return self._executor.submit(self._run, job, callback)

    def _run(self, job: Callable[[], Any], callback: Callback | None) -> Any:
        try:
            result = job()
        except Exception as exc:
            if callback is not None:
                self._completed.put((callback, exc, None))
            raise
        if callback is not None:
            self._completed.put((callback, None, result))
        return result

    def defer(self, callback: Callback, error: BaseException | None, result: Any = None) -> Future:
        """Schedule a callback for the next pump without doing any work."""
        future: Future = Future()
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)
        self._completed.put((callback, error, result))
        return future

    def pump(self) -> int:
        """Deliver every finished callback; returns how many ran."""
        delivered = 0
        while True:
            try:
                callback, error, result = self._completed.get_nowait()
            except queue.Empty:
                return delivered
            delivered += 1
            try:
                callback(error, result)
            except Exception:
                logger.exception("leaderboard callback failed")

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
