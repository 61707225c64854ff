"""Database session factory and configuration.

Provides database connectivity and the per-request session dependency. The
session is handed to services, which own their transaction boundaries (see
ConsultationService.process).
"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from config import get_settings

DATABASE_URL = get_settings().DATABASE_URL

# Pool settings only apply to PostgreSQL (not SQLite)
_engine_kwargs = {
    "pool_pre_ping": True,  # Verify connections before using
    "echo": False,
}

if not DATABASE_URL.startswith("sqlite"):
    _engine_kwargs["pool_size"] = 5
    _engine_kwargs["max_overflow"] = 10

engine = create_engine(DATABASE_URL, **_engine_kwargs)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def get_db() -> Generator[Session, None, None]:
    """Dependency for FastAPI endpoints.

    Usage:
        @app.get("/consultations")
        def list_consultations(db: Session = Depends(get_db)):
            return db.query(Consultation).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
