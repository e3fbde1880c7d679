"""
Process-wide worker pool for listener invocations.

Firing a signal never runs listeners on the caller's thread. Every invocation
is handed to the shared Dispatcher, which runs it on a thread pool inside an
isolation boundary: an exception raised by a listener is logged and dropped,
so it can neither reach the code that fired nor disturb sibling invocations.

Usage:
    Dispatcher.get().submit(callback, ("hello", 3))

    # block until everything scheduled so far has run (tests, shutdown)
    Dispatcher.get().wait(timeout=5)
"""

import logging
import threading
import time
from concurrent.futures import ALL_COMPLETED, Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_futures
from typing import Any, Callable, Optional, Set, Tuple

from signalbus.core.exceptions import ConfigurationError
from signalbus.settings import settings

logger = logging.getLogger(__name__)


def _invoke(callback: Callable[..., Any], args: Tuple[Any, ...], label: str) -> None:
    try:
        callback(*args)
    except Exception:
        logger.exception("Listener %r on %s raised", callback, label)


class Dispatcher:
    """
    Singleton executor for fire-and-forget listener invocations.

    Thread-safe for concurrent submission from any thread, including from
    listeners that are themselves running on the pool.
    """

    _instance: Optional["Dispatcher"] = None
    _lock = threading.Lock()

    def __init__(self, project_settings=None) -> None:
        self.settings = project_settings or settings
        errors = self.settings.validate()
        if errors:
            raise ConfigurationError(f"Configuration errors: {errors}")

        self._executor: Optional[ThreadPoolExecutor] = ThreadPoolExecutor(
            max_workers=self.settings.max_workers,
            thread_name_prefix=self.settings.thread_name_prefix,
        )
        self._active_futures: Set[Future] = set()
        self._futures_lock = threading.Lock()
        self._state_lock = threading.Lock()

        logger.info(
            "Dispatcher initialized (workers: %s, prefix: %s)",
            self.settings.max_workers,
            self.settings.thread_name_prefix,
        )

    @classmethod
    def get(cls) -> "Dispatcher":
        """
        Get the singleton Dispatcher instance.

        Thread-safe lazy initialization.
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls, wait: bool = True) -> None:
        """Shut down and drop the singleton (useful for testing)."""
        with cls._lock:
            if cls._instance is not None:
                cls._instance.shutdown(wait=wait)
                cls._instance = None

    def _track_future(self, future: Future) -> None:
        with self._futures_lock:
            self._active_futures.add(future)
        future.add_done_callback(self._remove_future)

    def _remove_future(self, future: Future) -> None:
        with self._futures_lock:
            self._active_futures.discard(future)

    def submit(
        self,
        callback: Callable[..., Any],
        args: Tuple[Any, ...] = (),
        label: str = "<signal>",
    ) -> Optional[Future]:
        """
        Schedule ``callback(*args)`` without waiting for it.

        Returns:
            A Future that always resolves to None, or None if the
            dispatcher is shut down.
        """
        with self._state_lock:
            executor = self._executor
        if executor is None:
            logger.warning("Invocation on %s submitted after shutdown, ignoring", label)
            return None

        # executor may be shut down between the read above and this call
        try:
            future = executor.submit(_invoke, callback, args, label)
        except RuntimeError as e:
            logger.error("Failed to schedule invocation on %s: %s", label, e)
            return None
        self._track_future(future)
        return future

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until every invocation scheduled so far has finished.

        Invocations scheduled while waiting (e.g. a listener firing another
        signal) are waited for too. Returns False if the timeout expired first.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            with self._futures_lock:
                pending = set(self._active_futures)
            if not pending:
                return True
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            _, not_done = wait_futures(pending, timeout=remaining, return_when=ALL_COMPLETED)
            if not_done:
                return False

    def shutdown(self, wait: bool = False) -> None:
        """
        Stop accepting invocations and release the pool.

        Args:
            wait: If True, let queued invocations run to completion.
                  If False, drop those that have not started yet.
        """
        with self._state_lock:
            executor, self._executor = self._executor, None
        if executor is None:
            return

        logger.info("Shutting down Dispatcher (wait=%s)", wait)
        executor.shutdown(wait=wait, cancel_futures=not wait)

    @property
    def is_shutdown(self) -> bool:
        with self._state_lock:
            return self._executor is None

    @property
    def pending(self) -> int:
        """Approximate count of invocations not yet finished."""
        with self._futures_lock:
            return sum(1 for f in self._active_futures if not f.done())


def _shutdown_at_exit() -> None:
    instance = Dispatcher._instance
    if instance is not None:
        instance.shutdown(wait=instance.settings.shutdown_wait)


# concurrent.futures drains its pools from a threading exit hook, which runs
# before atexit handlers; hooks run in reverse order, so ours goes first.
threading._register_atexit(_shutdown_at_exit)
