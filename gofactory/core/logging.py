import logging
import sys
from typing import Union

# Context fields every pipeline log line carries; call sites pass them via ``extra``.
CONTEXT_FIELDS = ("request_id", "stage")


class ContextFormatter(logging.Formatter):
    """Formatter that fills in request_id and stage when a record lacks them."""
    def format(self, record):
        for name in CONTEXT_FIELDS:
            if not hasattr(record, name):
                setattr(record, name, '-')
        return super().format(record)


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(
        "%(asctime)s %(levelname)s %(name)s [request_id=%(request_id)s stage=%(stage)s] - %(message)s"
    ))
    logging.basicConfig(
        level=level.upper() if isinstance(level, str) else level,
        handlers=[handler],
    )
