from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from app.shared.config import settings

# Local SQLite DB under ./storage/ (created if missing) unless DATABASE_URL is set
ROOT = Path(__file__).resolve().parents[2]   # project root
STORAGE_DIR = ROOT / "storage"


def _db_url() -> str:
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    STORAGE_DIR.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{(STORAGE_DIR / 'memos.db').as_posix()}"


def _unicode_lower(value):
    return value.casefold() if isinstance(value, str) else value


def register_sqlite_functions(eng) -> None:
    """SQLite's built-in lower() only folds ASCII; swap in Python's so
    case-insensitive LIKE (``icontains``) also folds non-ASCII letters."""
    if eng.dialect.name != "sqlite":
        return

    @event.listens_for(eng, "connect")
    def _on_connect(dbapi_conn, _record):
        dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)


DB_URL = _db_url()
_connect_args = {"check_same_thread": False} if DB_URL.startswith("sqlite") else {}

engine = create_engine(DB_URL, connect_args=_connect_args)
register_sqlite_functions(engine)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

class Base(DeclarativeBase):
    pass

# FastAPI dep
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
