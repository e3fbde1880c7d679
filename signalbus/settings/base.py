import os


def _env_bool(key: str, default: str = "false") -> bool:
    return os.environ.get(key, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Settings container with explicit configuration."""

    def __init__(self) -> None:
        self.environment = os.environ.get("SIGNALBUS_ENV", "base")
        self.log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
        # level for the signalbus logger namespace; empty inherits from root
        self.library_log_level = os.environ.get("SIGNALBUS_LOG_LEVEL", "").upper()

        # Worker pool used to run listener invocations
        self.max_workers_raw = os.environ.get("SIGNALBUS_MAX_WORKERS", "20")
        self.thread_name_prefix = os.environ.get("SIGNALBUS_THREAD_PREFIX", "signalbus")
        self.shutdown_wait = _env_bool("SIGNALBUS_SHUTDOWN_WAIT")

    @property
    def max_workers(self) -> int:
        return int(self.max_workers_raw)

    def validate(self) -> dict:
        """Validate configuration and return any errors."""
        errors = {}

        try:
            workers = int(self.max_workers_raw)
        except ValueError:
            errors["max_workers"] = (
                f"SIGNALBUS_MAX_WORKERS must be an integer, got {self.max_workers_raw!r}"
            )
        else:
            if workers < 1:
                errors["max_workers"] = "SIGNALBUS_MAX_WORKERS must be at least 1"

        if not self.thread_name_prefix:
            errors["thread_name_prefix"] = "SIGNALBUS_THREAD_PREFIX must not be empty"

        return errors


settings = Settings()
