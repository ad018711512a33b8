"""Database initialization - runs on backend startup."""
import logging
from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.config import settings
from app.core.security import hash_secret
from app.domain.entities.administrator import AdministratorProfile
from app.infrastructure.persistence import models

logger = logging.getLogger(__name__)

REQUIRED_TABLES = [
    models.Administrator.__tablename__,
    models.Vehicle.__tablename__,
    models.VehiclePhoto.__tablename__,
    models.VehicleRating.__tablename__,
]


def initialize_database(engine: Engine) -> bool:
    """Create missing tables and seed the default administrator.

    Returns:
        bool: True on success, False if initialization failed
    """
    try:
        models.Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Error creating database schema: {e}", exc_info=True)
        return False

    if not check_database_health(engine):
        return False

    if settings.SEED_DEFAULT_ADMIN and not seed_default_administrator(engine):
        return False

    logger.info("Database schema initialized successfully")
    return True


def seed_default_administrator(engine: Engine) -> bool:
    """Insert the default administrator when no administrator exists yet."""
    session = sessionmaker(bind=engine, future=True)()
    try:
        if session.query(models.Administrator).count() > 0:
            return True
        session.add(
            models.Administrator(
                email=settings.DEFAULT_ADMIN_EMAIL,
                secret=hash_secret(settings.DEFAULT_ADMIN_SECRET),
                profile=AdministratorProfile.ADM.value,
            )
        )
        session.commit()
        logger.info(f"Seeded default administrator {settings.DEFAULT_ADMIN_EMAIL}")
        return True
    except Exception as e:
        session.rollback()
        logger.error(f"Error seeding default administrator: {e}", exc_info=True)
        return False
    finally:
        session.close()


def check_database_health(engine: Engine) -> bool:
    """Check if all required tables exist.

    Returns:
        bool: True if all tables exist, False otherwise
    """
    try:
        existing = set(inspect(engine).get_table_names())
    except Exception as e:
        logger.error(f"Error checking database health: {e}")
        return False

    missing = [t for t in REQUIRED_TABLES if t not in existing]
    if missing:
        logger.error(f"Tables not found: {', '.join(missing)}")
        return False
    logger.info("All required tables exist")
    return True
