import logging
from typing import Optional

from signalbus.settings import settings

LOGGER_NAMESPACE = "signalbus"


def configure_logging(level: Optional[str] = None, library_level: Optional[str] = None) -> None:
    """Configure logging once for the whole process.

    ``level`` applies to the root logger. ``library_level`` applies to the
    ``signalbus`` logger namespace only, so listener faults and dispatcher
    lifecycle can be turned up or down without touching the host app.
    """
    log_level = level or settings.log_level
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=numeric_level,
        force=True,  # ensure we override any prior configuration
    )

    namespace_level = library_level or settings.library_log_level
    namespace = logging.getLogger(LOGGER_NAMESPACE)
    if namespace_level:
        namespace.setLevel(getattr(logging, namespace_level.upper(), numeric_level))
    else:
        namespace.setLevel(logging.NOTSET)
