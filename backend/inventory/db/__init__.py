from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from inventory.config import settings


def make_engine(url: str) -> Engine:
    # sessions are handed between the event loop and the threadpool
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, future=True, echo=False, connect_args=connect_args)


def reset_requested() -> bool:
    """RESET_DB=1 (env or .env) drops and recreates tables at startup; used by CI."""
    return settings.RESET_DB
