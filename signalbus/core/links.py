"""
Links group signals so a single fire reaches all of them.

Membership is non-owning: a Link keeps weak references to its signals, so it
never keeps a signal alive, and a signal that has been collected simply drops
out of the link. Adding a signal that is already a member does not create a
second membership; the handle returned refers to the existing one.
"""

import itertools
import logging
import threading
import weakref
from typing import Any, Dict, List, Optional, Tuple

from signalbus.core.signals import Handle, Signal

logger = logging.getLogger(__name__)


class Link:
    """Ordered set of member signals with its own enabled gate."""

    is_link = True

    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name
        self.enabled = True
        self._members: Dict[int, weakref.ref] = {}
        self._ids = itertools.count(1)
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"<Link {self.name or hex(id(self))}>"

    def __len__(self) -> int:
        return len(self.members())

    def __contains__(self, signal: Signal) -> bool:
        return any(member is signal for member in self.members())

    def _prune(self) -> None:
        dead = [edge for edge, ref in self._members.items() if ref() is None]
        for edge in dead:
            del self._members[edge]

    def members(self) -> List[Signal]:
        """Live member signals in insertion order."""
        with self._lock:
            self._prune()
            refs = list(self._members.values())
        return [signal for signal in (ref() for ref in refs) if signal is not None]

    def add(self, signal: Signal) -> Handle:
        """Add ``signal``; returns a handle that removes only this membership."""
        with self._lock:
            self._prune()
            edge = next((e for e, ref in self._members.items() if ref() is signal), None)
            added = edge is None
            if added:
                edge = next(self._ids)
                self._members[edge] = weakref.ref(signal)
        signal._set_link(self)
        if added:
            logger.debug("Added %r to %r", signal, self)
        return Handle(self._remove, edge)

    def _remove(self, edge: int) -> bool:
        with self._lock:
            ref = self._members.pop(edge, None)
        if ref is None:
            return False
        self._detach(ref())
        return True

    def _detach(self, signal: Optional[Signal]) -> None:
        if signal is not None and signal.link is self:
            signal._set_link(None)

    def clear(self) -> None:
        with self._lock:
            refs = list(self._members.values())
            self._members.clear()
        for ref in refs:
            self._detach(ref())

    def enable(self, enabled: bool = True) -> None:
        self.enabled = bool(enabled)

    def dispatch(self, args: Tuple[Any, ...]) -> None:
        if not self.enabled:
            return
        for signal in self.members():
            if signal.enabled:
                signal.dispatch(args)

    def fire(self, *args: Any) -> None:
        """Fire every enabled member signal with ``args``."""
        self.dispatch(args)


def add_link(link: Link, signal: Signal) -> Handle:
    return link.add(signal)


def clear_link(link: Link) -> None:
    link.clear()
