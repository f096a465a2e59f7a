from sqlalchemy.orm import declarative_base, sessionmaker

from inventory.config import settings
from inventory.db import make_engine, reset_requested
from inventory.utils.logging import get_logger

log = get_logger("inventory.db")

engine = make_engine(settings.TRANSACTIONS_DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db(reset: bool = None):
    """Create the transactions table, dropping it first when a reset is requested."""
    import inventory.models.transaction  # noqa: F401

    if reset is None:
        reset = reset_requested()
    if reset:
        log.info("Resetting transactions database...")
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    log.info(f"Transactions database initialized url={engine.url!r}")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
