import logging
import threading
from typing import Dict, Optional

from signalbus.core.exceptions import NameAlreadyBoundError
from signalbus.core.signals import Signal

logger = logging.getLogger(__name__)


class SignalRegistry:
    """Name to Signal mapping shared across independent call sites.

    Entries are plain references: removing a name never touches the signal
    itself. ``list()`` returns a copy, so editing the result has no effect on
    the registry.
    """

    def __init__(self) -> None:
        self._signals: Dict[str, Signal] = {}
        self._lock = threading.RLock()

    def store(self, name: str, signal: Signal, override: bool = False) -> None:
        with self._lock:
            if name in self._signals and not override:
                raise NameAlreadyBoundError(name)
            previous = self._signals.get(name)
            self._signals[name] = signal
        if previous is not None and previous is not signal:
            logger.debug("Replaced %r with %r under %r", previous, signal, name)

    def get(self, name: str) -> Optional[Signal]:
        with self._lock:
            return self._signals.get(name)

    def get_or_create(self, name: str) -> Signal:
        """Return the signal bound to ``name``, binding a new one if needed."""
        with self._lock:
            signal = self._signals.get(name)
            if signal is None:
                signal = Signal(name)
                self._signals[name] = signal
            return signal

    def remove(self, name: str) -> None:
        with self._lock:
            self._signals.pop(name, None)

    def list(self) -> Dict[str, Signal]:
        with self._lock:
            return dict(self._signals)

    def clear(self) -> None:
        with self._lock:
            self._signals.clear()

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._signals

    def __len__(self) -> int:
        with self._lock:
            return len(self._signals)


# Process-wide registry
registry = SignalRegistry()


def store(name: str, signal: Signal, override: bool = False) -> None:
    registry.store(name, signal, override=override)


def get(name: str) -> Optional[Signal]:
    return registry.get(name)


def remove(name: str) -> None:
    registry.remove(name)


def list_signals() -> Dict[str, Signal]:
    return registry.list()
