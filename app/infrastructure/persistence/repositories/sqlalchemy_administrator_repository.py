"""SQLAlchemy implementation of AdministratorRepository."""
import logging
from typing import Optional, List
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.domain.entities.administrator import Administrator as AdministratorEntity
from app.domain.errors import Conflict, StorageError
from app.domain.repositories.administrator_repository import AdministratorRepository
from app.infrastructure.persistence import models
from app.infrastructure.persistence.integrity import (
    is_foreign_key_violation,
    is_unique_violation,
    storage_errors,
)

logger = logging.getLogger(__name__)


def _to_entity(row: models.Administrator) -> AdministratorEntity:
    return AdministratorEntity(
        id=row.id,
        email=row.email,
        secret=row.secret,
        profile=row.profile,
    )


class SQLAlchemyAdministratorRepository(AdministratorRepository):
    """Administrator repository using SQLAlchemy."""

    def __init__(self, session: Session):
        self.session = session

    async def exists(self, administrator_id: int) -> bool:
        with storage_errors(self.session, "check the administrator"):
            return self.session.get(models.Administrator, administrator_id) is not None

    async def get_by_id(self, administrator_id: int) -> Optional[AdministratorEntity]:
        with storage_errors(self.session, "load the administrator"):
            row = self.session.get(models.Administrator, administrator_id)
        return _to_entity(row) if row else None

    async def get_by_email(self, email: str) -> Optional[AdministratorEntity]:
        with storage_errors(self.session, "load the administrator"):
            row = (
                self.session.query(models.Administrator)
                .filter(models.Administrator.email == email)
                .first()
            )
        return _to_entity(row) if row else None

    async def list_page(self, skip: int = 0, limit: int = 10) -> List[AdministratorEntity]:
        with storage_errors(self.session, "list administrators"):
            rows = (
                self.session.query(models.Administrator)
                .order_by(models.Administrator.id)
                .offset(skip)
                .limit(limit)
                .all()
            )
        return [_to_entity(r) for r in rows]

    async def create(self, administrator: AdministratorEntity) -> AdministratorEntity:
        row = models.Administrator(
            email=administrator.email,
            secret=administrator.secret,
            profile=administrator.profile,
        )
        self.session.add(row)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if is_unique_violation(e, "email", models.Administrator.__tablename__):
                raise Conflict(f"Administrator with email '{administrator.email}' already exists") from e
            logger.error(f"Integrity error saving administrator: {e}", exc_info=True)
            raise StorageError("Error saving the administrator", cause=e) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database error saving administrator: {e}", exc_info=True)
            raise StorageError("Error saving the administrator", cause=e) from e
        self.session.refresh(row)
        return _to_entity(row)

    async def delete(self, administrator_id: int) -> bool:
        with storage_errors(self.session, "delete the administrator"):
            row = self.session.get(models.Administrator, administrator_id)
            if not row:
                return False
            referenced = (
                self.session.query(models.VehicleRating.id)
                .filter(models.VehicleRating.administrator_id == administrator_id)
                .first()
            )
        if referenced:
            raise Conflict(f"Administrator {administrator_id} still has ratings")

        self.session.delete(row)
        try:
            self.session.commit()
        except IntegrityError as e:
            # A rating was added between the check and the delete
            self.session.rollback()
            if is_foreign_key_violation(e):
                raise Conflict(f"Administrator {administrator_id} still has ratings") from e
            logger.error(f"Integrity error deleting administrator: {e}", exc_info=True)
            raise StorageError("Error deleting the administrator", cause=e) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database error deleting administrator: {e}", exc_info=True)
            raise StorageError("Error deleting the administrator", cause=e) from e
        return True
