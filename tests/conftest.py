import threading
from typing import Any, List, Tuple

import pytest

from signalbus.core.dispatch import Dispatcher
from signalbus.core.registry import registry

TIMEOUT = 5.0


class Recorder:
    """Thread-safe listener that records every call."""

    def __init__(self, expected: int = 1) -> None:
        self.calls: List[Tuple[Any, ...]] = []
        self._lock = threading.Lock()
        self._expected = expected
        self._done = threading.Event()

    def __call__(self, *args: Any) -> None:
        with self._lock:
            self.calls.append(args)
            if len(self.calls) >= self._expected:
                self._done.set()

    def wait(self, timeout: float = TIMEOUT) -> bool:
        return self._done.wait(timeout)


@pytest.fixture(autouse=True)
def fresh_state():
    Dispatcher.reset()
    registry.clear()
    yield
    Dispatcher.reset()
    registry.clear()


@pytest.fixture
def drain():
    def _drain() -> None:
        assert Dispatcher.get().wait(timeout=TIMEOUT)

    return _drain
