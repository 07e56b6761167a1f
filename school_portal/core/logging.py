# school_portal/core/logging.py
import logging
import sys

_CONFIGURED = False


def configure_logging(level: str = "INFO") -> None:
    """Route all loggers to stdout once; later calls only adjust the level."""
    global _CONFIGURED
    root = logging.getLogger()
    root.setLevel(level.upper())
    if _CONFIGURED:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    root.handlers = [handler]
    _CONFIGURED = True
