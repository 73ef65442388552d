"""Database connection and session management."""

from pathlib import Path
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session as OrmSession

from .models import Base, SettingEntry

# ── paths ────────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "Pomodore"
DB_PATH = APP_SUPPORT_DIR / "pomodore.db"

# ── engine & session factory (created lazily) ─────────────────────────────

_engine = None
_SessionFactory = None


def _get_engine():
    global _engine
    if _engine is None:
        APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
        _engine = create_engine(f"sqlite:///{DB_PATH}")
    return _engine


def _get_session_factory():
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=_get_engine(), expire_on_commit=False)
    return _SessionFactory


# ── public API ────────────────────────────────────────────────────────────


def configure_engine(url: str) -> None:
    """Override the database connection URL.  Used by tests to point at
    an in-memory SQLite database instead of the real one on disk."""
    global _engine, _SessionFactory
    _SessionFactory = None
    _engine = create_engine(url)


def init_db(defaults: dict[str, str] | None = None) -> None:
    """Create all tables and seed any missing settings keys.

    *defaults* maps setting keys to their stored text form.  Existing rows
    are never overwritten, so calling this on every launch is safe.
    """
    engine = _get_engine()
    Base.metadata.create_all(engine)

    if not defaults:
        return

    factory = _get_session_factory()
    with factory() as session:
        existing = {key for (key,) in session.query(SettingEntry.key)}
        for key, value in defaults.items():
            if key not in existing:
                session.add(SettingEntry(key=key, value=value))
        session.commit()


@contextmanager
def get_session():
    """Yield a SQLAlchemy session; commit on success, rollback on error."""
    factory = _get_session_factory()
    session: OrmSession = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
