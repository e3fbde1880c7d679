import importlib
import os

from dotenv import load_dotenv

load_dotenv()


def load_settings():
    """Load the configured settings module."""
    module_path = os.environ.get(
        "SIGNALBUS_SETTINGS_MODULE",
        "signalbus.settings.base",
    )
    module = importlib.import_module(module_path)
    return getattr(module, "settings")


settings = load_settings()

__all__ = ["settings", "load_settings"]
