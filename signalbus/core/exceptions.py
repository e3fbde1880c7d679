class SignalBusError(Exception):
    """Base class for errors raised by signalbus."""


class ConfigurationError(SignalBusError):
    """Raised when required configuration is missing or invalid."""


class NameAlreadyBoundError(SignalBusError, KeyError):
    """Raised when storing a signal under a name that is already taken."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"a signal is already registered as {self.name!r}"
