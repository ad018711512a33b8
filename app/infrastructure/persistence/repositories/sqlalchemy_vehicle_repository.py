"""SQLAlchemy implementation of VehicleRepository."""
from decimal import Decimal
from typing import Optional, List
from sqlalchemy.orm import Session, selectinload
from app.domain.entities.vehicle import (
    Vehicle as VehicleEntity,
    VehiclePhoto as VehiclePhotoEntity,
    VehicleStatus,
)
from app.domain.errors import NotFound
from app.domain.repositories.vehicle_repository import VehicleRepository
from app.infrastructure.persistence import models
from app.infrastructure.persistence.integrity import storage_errors


def _to_photo(row: models.VehiclePhoto) -> VehiclePhotoEntity:
    return VehiclePhotoEntity(id=row.id, url=row.url, vehicle_id=row.vehicle_id)


def _to_entity(row: models.Vehicle) -> VehicleEntity:
    """Map ORM model to domain entity."""
    return VehicleEntity(
        id=row.id,
        name=row.name,
        make=row.make,
        year=row.year,
        plate=row.plate,
        color=row.color,
        price=Decimal(row.price) if row.price is not None else Decimal("0"),
        mileage=Decimal(row.mileage) if row.mileage is not None else Decimal("0"),
        status=VehicleStatus(row.status),
        description=row.description,
        photos=[_to_photo(p) for p in row.photos],
    )


class SQLAlchemyVehicleRepository(VehicleRepository):
    """Vehicle repository using SQLAlchemy."""

    def __init__(self, session: Session):
        self.session = session

    async def exists(self, vehicle_id: int) -> bool:
        with storage_errors(self.session, "check the vehicle"):
            row = (
                self.session.query(models.Vehicle.id)
                .filter(models.Vehicle.id == vehicle_id)
                .first()
            )
        return row is not None

    async def get_by_id(self, vehicle_id: int) -> Optional[VehicleEntity]:
        with storage_errors(self.session, "load the vehicle"):
            row = self.session.get(models.Vehicle, vehicle_id)
            return _to_entity(row) if row else None

    async def list_page(self, skip: int = 0, limit: int = 10) -> List[VehicleEntity]:
        with storage_errors(self.session, "list vehicles"):
            rows = (
                self.session.query(models.Vehicle)
                .options(selectinload(models.Vehicle.photos))
                .order_by(models.Vehicle.id)
                .offset(skip)
                .limit(limit)
                .all()
            )
            return [_to_entity(r) for r in rows]

    async def create(self, vehicle: VehicleEntity) -> VehicleEntity:
        row = models.Vehicle(
            name=vehicle.name,
            make=vehicle.make,
            year=vehicle.year,
            plate=vehicle.plate,
            status=vehicle.status,
            color=vehicle.color,
            mileage=vehicle.mileage,
            price=vehicle.price,
            description=vehicle.description,
            photos=[models.VehiclePhoto(url=p.url) for p in vehicle.photos],
        )
        with storage_errors(self.session, "save the vehicle"):
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
            return _to_entity(row)

    async def update(self, vehicle: VehicleEntity) -> VehicleEntity:
        with storage_errors(self.session, "update the vehicle"):
            row = self.session.get(models.Vehicle, vehicle.id)
            if not row:
                raise NotFound("vehicle", vehicle.id)
            row.name = vehicle.name
            row.make = vehicle.make
            row.year = vehicle.year
            row.plate = vehicle.plate
            row.status = vehicle.status
            row.color = vehicle.color
            row.mileage = vehicle.mileage
            row.price = vehicle.price
            row.description = vehicle.description

            kept_ids = {p.id for p in vehicle.photos if p.id is not None}
            row.photos = [p for p in row.photos if p.id in kept_ids] + [
                models.VehiclePhoto(url=p.url) for p in vehicle.photos if p.id is None
            ]
            self.session.commit()
            self.session.refresh(row)
            return _to_entity(row)

    async def delete(self, vehicle_id: int) -> bool:
        with storage_errors(self.session, "delete the vehicle"):
            row = self.session.get(models.Vehicle, vehicle_id)
            if not row:
                return False
            # Ratings go with the vehicle through ON DELETE CASCADE
            self.session.delete(row)
            self.session.commit()
        return True

    async def add_photo(self, vehicle_id: int, url: str) -> VehiclePhotoEntity:
        if not await self.exists(vehicle_id):
            raise NotFound("vehicle", vehicle_id)
        row = models.VehiclePhoto(vehicle_id=vehicle_id, url=url)
        with storage_errors(self.session, "save the photo"):
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
            return _to_photo(row)

    async def delete_photo(self, vehicle_id: int, photo_id: int) -> bool:
        with storage_errors(self.session, "delete the photo"):
            row = (
                self.session.query(models.VehiclePhoto)
                .filter(
                    models.VehiclePhoto.id == photo_id,
                    models.VehiclePhoto.vehicle_id == vehicle_id,
                )
                .first()
            )
            if not row:
                return False
            self.session.delete(row)
            self.session.commit()
        return True
