"""
Signals and their connections.

A Signal keeps its connections in insertion order. Firing takes a snapshot of
that order under the signal's lock and hands one invocation per connection to
the Dispatcher, then returns without waiting. Connections added or removed
after the snapshot do not affect a fire that already took it.
"""

import itertools
import logging
import threading
import weakref
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from signalbus.core.dispatch import Dispatcher

logger = logging.getLogger(__name__)


class Handle:
    """Zero-argument callable that undoes one connect or one link membership.

    Calling it more than once is a no-op.
    """

    __slots__ = ("_release", "_key")

    def __init__(self, release: Callable[[int], bool], key: int) -> None:
        self._release = release
        self._key = key

    def __call__(self) -> None:
        self._release(self._key)

    def __repr__(self) -> str:
        return f"<Handle {self._key} of {self._release.__self__!r}>"


class Connection:
    """One callback registration, identified by an id unique within its Signal."""

    __slots__ = ("id", "callback")

    def __init__(self, connection_id: int, callback: Callable[..., Any]) -> None:
        self.id = connection_id
        self.callback = callback

    def __repr__(self) -> str:
        return f"<Connection {self.id} -> {self.callback!r}>"


class Signal:
    """Ordered collection of connections with an enabled gate."""

    is_link = False

    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name
        self.enabled = True
        self._connections: Dict[int, Connection] = {}
        self._ids = itertools.count(1)
        self._lock = threading.RLock()
        self._link_ref: Optional[weakref.ref] = None

    def __repr__(self) -> str:
        return f"<Signal {self.name or hex(id(self))}>"

    def __len__(self) -> int:
        with self._lock:
            return len(self._connections)

    @property
    def connections(self) -> Tuple[Connection, ...]:
        with self._lock:
            return tuple(self._connections.values())

    @property
    def link(self):
        """The last Link this signal was added to, if still a member of it."""
        return self._link_ref() if self._link_ref is not None else None

    def _set_link(self, link) -> None:
        self._link_ref = weakref.ref(link) if link is not None else None

    def connect(self, callback: Callable[..., Any]) -> Handle:
        """Attach ``callback``; returns a handle that detaches exactly this connection."""
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")
        with self._lock:
            connection = Connection(next(self._ids), callback)
            self._connections[connection.id] = connection
        logger.debug("Connected %r to %r", connection, self)
        return Handle(self._disconnect, connection.id)

    def _disconnect(self, connection_id: int) -> bool:
        with self._lock:
            removed = self._connections.pop(connection_id, None)
        return removed is not None

    def disconnect_all(self) -> None:
        """Drop every connection. Invocations already scheduled still run."""
        with self._lock:
            self._connections.clear()

    def enable(self, enabled: bool = True) -> None:
        self.enabled = bool(enabled)

    def dispatch(self, args: Tuple[Any, ...]) -> None:
        if not self.enabled:
            return
        snapshot = self.connections
        if not snapshot:
            return
        dispatcher = Dispatcher.get()
        label = repr(self)
        for connection in snapshot:
            dispatcher.submit(connection.callback, args, label)

    def fire(self, *args: Any) -> None:
        """Schedule every connected callback with ``args`` and return immediately."""
        self.dispatch(args)


def connect(signal: Signal, callback: Callable[..., Any]) -> Handle:
    return signal.connect(callback)


def disconnect_all(signal: Signal) -> None:
    signal.disconnect_all()


def enable(target, enabled: bool = True) -> None:
    """Set the enabled gate of a Signal or a Link."""
    target.enable(enabled)


def fire(target, *args: Any) -> None:
    """Fire a Signal or a Link; anything with a ``dispatch(args)`` method works."""
    target.dispatch(args)


def fire_list(targets: Iterable, *args: Any) -> None:
    """Fire each target in order, as if ``fire`` were called on every one."""
    for target in list(targets):
        target.dispatch(args)
