import logging
import sys
from contextvars import ContextVar

from vendor_risk.core.settings import get_settings

# Correlation id del request actual ("-" fuera de un request)
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="-")


def get_correlation_id() -> str:
    return _correlation_id.get()


def set_correlation_id(value: str):
    return _correlation_id.set(value)


def reset_correlation_id(token) -> None:
    _correlation_id.reset(token)


class CorrelationIdFilter(logging.Filter):
    """Agrega el correlation id a cada registro de log."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


# Config básica
logger = logging.getLogger("VENDOR_RISK")
logger.setLevel(getattr(logging, get_settings().LOG_LEVEL.upper(), logging.INFO))

handler = logging.StreamHandler(sys.stdout)
formatter = logging.Formatter(
    "[%(asctime)s] [%(levelname)s] (%(name)s) [%(correlation_id)s] - %(message)s"
)

handler.setFormatter(formatter)
handler.addFilter(CorrelationIdFilter())
logger.addHandler(handler)


def get_logger(name: str = None):
    if name is None:
        return logger
    # Todos los modulos cuelgan del logger raiz del proyecto
    return logger.getChild(name)
