"""SQLAlchemy implementation of RatingRepository."""
import logging
from typing import Optional, List
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.domain.entities.administrator import AdministratorPublic
from app.domain.entities.rating import Rating as RatingEntity, RatingView
from app.domain.entities.vehicle import VehicleSummary
from app.domain.errors import Conflict, StorageError
from app.domain.repositories.rating_repository import RatingRepository
from app.domain.value_objects.rating import RatingSummary
from app.infrastructure.persistence import models
from app.infrastructure.persistence.integrity import is_unique_violation, storage_errors

logger = logging.getLogger(__name__)

UNIQUE_PAIR_CONSTRAINT = "uq_vehicle_ratings_vehicle_admin"


def _to_entity(row: models.VehicleRating) -> RatingEntity:
    """Map ORM model to domain entity."""
    return RatingEntity(
        id=row.id,
        vehicle_id=row.vehicle_id,
        administrator_id=row.administrator_id,
        stars=row.stars,
        comment=row.comment,
        created_at=row.created_at,
    )


def _to_author(row: models.Administrator) -> AdministratorPublic:
    return AdministratorPublic(id=row.id, email=row.email, profile=row.profile)


def _to_vehicle_summary(row: models.Vehicle) -> VehicleSummary:
    return VehicleSummary(id=row.id, name=row.name, make=row.make, year=row.year, plate=row.plate)


class SQLAlchemyRatingRepository(RatingRepository):
    """Rating repository using SQLAlchemy."""

    def __init__(self, session: Session):
        self.session = session

    async def exists_for(self, vehicle_id: int, administrator_id: int) -> bool:
        with storage_errors(self.session, "check for an existing rating"):
            row = (
                self.session.query(models.VehicleRating.id)
                .filter(
                    models.VehicleRating.vehicle_id == vehicle_id,
                    models.VehicleRating.administrator_id == administrator_id,
                )
                .first()
            )
        return row is not None

    async def add(self, rating: RatingEntity) -> RatingEntity:
        row = models.VehicleRating(
            vehicle_id=rating.vehicle_id,
            administrator_id=rating.administrator_id,
            stars=rating.stars,
            comment=rating.comment,
            created_at=rating.created_at,
        )
        self.session.add(row)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if is_unique_violation(e, UNIQUE_PAIR_CONSTRAINT, models.VehicleRating.__tablename__):
                logger.warning(
                    f"Duplicate rating rejected by store: vehicle={rating.vehicle_id} "
                    f"admin={rating.administrator_id}"
                )
                raise Conflict("duplicate rating") from e
            logger.error(f"Integrity error saving rating: {e}", exc_info=True)
            raise StorageError("Error saving the rating", cause=e) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database error saving rating: {e}", exc_info=True)
            raise StorageError("Error saving the rating", cause=e) from e
        self.session.refresh(row)
        return _to_entity(row)

    async def get_view(self, rating_id: int) -> Optional[RatingView]:
        with storage_errors(self.session, "load the rating"):
            row = (
                self.session.query(models.VehicleRating, models.Administrator, models.Vehicle)
                .join(models.Administrator, models.VehicleRating.administrator_id == models.Administrator.id)
                .join(models.Vehicle, models.VehicleRating.vehicle_id == models.Vehicle.id)
                .filter(models.VehicleRating.id == rating_id)
                .first()
            )
        if not row:
            return None
        rating, administrator, vehicle = row
        return RatingView(
            rating=_to_entity(rating),
            author=_to_author(administrator),
            vehicle=_to_vehicle_summary(vehicle),
        )

    async def list_for_vehicle(self, vehicle_id: int) -> List[RatingView]:
        with storage_errors(self.session, "list the vehicle's ratings"):
            rows = (
                self.session.query(models.VehicleRating, models.Administrator)
                .join(models.Administrator, models.VehicleRating.administrator_id == models.Administrator.id)
                .filter(models.VehicleRating.vehicle_id == vehicle_id)
                .order_by(models.VehicleRating.created_at.desc(), models.VehicleRating.id.desc())
                .all()
            )
        return [RatingView(rating=_to_entity(r), author=_to_author(a)) for r, a in rows]

    async def summary_for_vehicle(self, vehicle_id: int) -> RatingSummary:
        with storage_errors(self.session, "summarize the vehicle's ratings"):
            count, average = (
                self.session.query(
                    func.count(models.VehicleRating.id),
                    func.avg(models.VehicleRating.stars),
                )
                .filter(models.VehicleRating.vehicle_id == vehicle_id)
                .one()
            )
        if not count:
            return RatingSummary(count=0)
        # MySQL returns AVG as DECIMAL
        return RatingSummary(count=int(count), average=float(average))

    async def delete(self, rating_id: int) -> bool:
        with storage_errors(self.session, "delete the rating"):
            row = self.session.get(models.VehicleRating, rating_id)
            if not row:
                return False
            self.session.delete(row)
            self.session.commit()
        return True
