from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url

from newsbot.config.settings import get_settings
from newsbot.db.models import Base

_engine: Engine | None = None


def _ensure_sqlite_dir(url: str) -> None:
    u = make_url(url)
    if u.get_backend_name() == "sqlite" and u.database and u.database != ":memory:":
        Path(u.database).parent.mkdir(parents=True, exist_ok=True)


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        s = get_settings()
        _ensure_sqlite_dir(s.database_url)
        _engine = create_engine(s.database_url, future=True)
    return _engine


def init_db(engine: Engine | None = None) -> None:
    """
    Create tables (idempotent) and verify connectivity.
    """
    engine = engine or get_engine()

    # Create all tables
    Base.metadata.create_all(engine)

    # Connectivity check
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
