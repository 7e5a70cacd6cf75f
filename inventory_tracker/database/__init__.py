from inventory_tracker.database.base import Base
from inventory_tracker.database.engine import build_engine, engine, init_db
from inventory_tracker.database.session import SessionLocal, get_db, session_factory

__all__ = ["Base", "SessionLocal", "build_engine", "engine", "get_db", "init_db", "session_factory"]
