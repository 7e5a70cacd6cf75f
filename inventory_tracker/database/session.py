from typing import Iterator

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from inventory_tracker.database.engine import engine


def session_factory(bind: Engine) -> sessionmaker:
    """Sessions stay usable after commit so handlers can serialize returned rows."""
    return sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)


SessionLocal = session_factory(engine)


def get_db() -> Iterator[Session]:
    with SessionLocal() as db:
        yield db
