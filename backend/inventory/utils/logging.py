import logging
import sys

from inventory.config import settings


def get_logger(name: str) -> logging.Logger:
    """
    Return a named logger writing to stdout. Handlers are attached once per
    logger so repeated imports (uvicorn reload, pytest) don't duplicate lines.
    """
    log = logging.getLogger(name)
    log.setLevel(settings.LOG_LEVEL.upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter("[%(name)s] %(levelname)s %(message)s"))
        log.addHandler(h)
    return log
