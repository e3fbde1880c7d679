"""In-process publish/subscribe: signals, links and a process-wide registry."""

from signalbus.core.dispatch import Dispatcher
from signalbus.core.exceptions import (
    ConfigurationError,
    NameAlreadyBoundError,
    SignalBusError,
)
from signalbus.core.links import Link, add_link, clear_link
from signalbus.core.logging import configure_logging
from signalbus.core.registry import (
    SignalRegistry,
    get,
    list_signals,
    registry,
    remove,
    store,
)
from signalbus.core.signals import (
    Connection,
    Handle,
    Signal,
    connect,
    disconnect_all,
    enable,
    fire,
    fire_list,
)

__all__ = [
    "Signal",
    "Connection",
    "Handle",
    "Link",
    "SignalRegistry",
    "Dispatcher",
    "connect",
    "disconnect_all",
    "enable",
    "fire",
    "fire_list",
    "add_link",
    "clear_link",
    "store",
    "get",
    "remove",
    "list_signals",
    "registry",
    "configure_logging",
    "SignalBusError",
    "ConfigurationError",
    "NameAlreadyBoundError",
]
