# salonbook/utils/my_logging.py
"""Logging configuration"""
import logging
import sys
from contextvars import ContextVar

from salonbook.config.settings import get_settings

# Set per request by the correlation id middleware
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="-")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"

NOISY_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "alembic",
    "twilio.http_client",
    "uvicorn.access",
)


class CorrelationIdFilter(logging.Filter):
    """Stamps every record with the id of the request being served"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get()
        return True


def setup_logging(verbose=True):
    """
    Log to stdout at LOG_LEVEL (WARNING when not verbose).

    Library chatter from the database driver, twilio and the access log is
    kept at ERROR unless verbose and DEBUG are both on.
    """
    settings = get_settings()

    if verbose:
        level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    else:
        level = logging.WARNING

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(level=level, handlers=[handler])

    if not (verbose and settings.DEBUG):
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.ERROR)
