import os

from signalbus.settings.base import Settings, _env_bool


class ProdSettings(Settings):
    """Production overrides keep behavior explicit and boring."""

    def __init__(self) -> None:
        super().__init__()
        self.environment = "prod"
        self.log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
        # let queued listeners finish before the interpreter exits
        self.shutdown_wait = _env_bool("SIGNALBUS_SHUTDOWN_WAIT", "true")


settings = ProdSettings()
