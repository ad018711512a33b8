"""Database setup helpers (SQLAlchemy engine/session)."""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from app.config import settings

# The project .env is loaded by app.config before settings are built
DATABASE_URL = settings.database_url()

engine = create_engine(DATABASE_URL, future=True, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
Base = declarative_base()


def get_db():
    """FastAPI-style dependency to provide a DB session per request.

    The session is closed on every exit path, including errors.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
