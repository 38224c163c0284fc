"""
Logging setup shared by the leasing service entry points.
"""
import logging
import sys

from shared.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    global _configured

    resolved = (level or settings.LOG_LEVEL or "INFO").upper()
    root = logging.getLogger()
    root.setLevel(resolved)

    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    # SQL echo is far too chatty at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    _configured = True
