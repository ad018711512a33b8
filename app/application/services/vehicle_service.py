"""Vehicle management: CRUD over vehicles and the photos they own."""
import logging
from typing import List

from app.application.dto.vehicle_dto import VehicleInput
from app.config import settings
from app.domain.entities.vehicle import Vehicle, VehiclePhoto, photo_url_errors
from app.domain.errors import DomainError, NotFound, Result, ValidationError
from app.domain.repositories.vehicle_repository import VehicleRepository

logger = logging.getLogger(__name__)


def _build_vehicle(vehicle_id, data: VehicleInput, photos: List[VehiclePhoto]) -> Vehicle:
    return Vehicle(
        id=vehicle_id,
        name=data.name,
        make=data.make,
        year=data.year,
        plate=data.plate,
        color=data.color,
        price=data.price,
        mileage=data.mileage,
        status=data.status,
        description=data.description,
        photos=photos,
    )


class VehicleService:
    """Application service for the vehicle inventory."""

    def __init__(self, vehicle_repository: VehicleRepository):
        self._vehicle_repo = vehicle_repository

    async def create_vehicle(self, data: VehicleInput) -> Result[Vehicle]:
        photos = [VehiclePhoto(id=None, url=url) for url in (data.photo_urls or [])]
        vehicle = _build_vehicle(None, data, photos)
        errors = vehicle.validation_errors()
        if errors:
            return Result.failure(ValidationError(errors))
        try:
            created = await self._vehicle_repo.create(vehicle)
        except DomainError as e:
            return Result.failure(e)
        logger.info(f"Vehicle {created.id} created ({created.make} {created.name})")
        return Result.success(created)

    async def list_vehicles(self, page: int = 1) -> Result[List[Vehicle]]:
        """List one page of vehicles (1-based page number)."""
        page = max(page or 1, 1)
        skip = (page - 1) * settings.VEHICLE_PAGE_SIZE
        try:
            return Result.success(
                await self._vehicle_repo.list_page(skip=skip, limit=settings.VEHICLE_PAGE_SIZE)
            )
        except DomainError as e:
            return Result.failure(e)

    async def get_vehicle(self, vehicle_id: int) -> Result[Vehicle]:
        try:
            vehicle = await self._vehicle_repo.get_by_id(vehicle_id)
        except DomainError as e:
            return Result.failure(e)
        if vehicle is None:
            return Result.failure(NotFound("vehicle", vehicle_id))
        return Result.success(vehicle)

    async def update_vehicle(self, vehicle_id: int, data: VehicleInput) -> Result[Vehicle]:
        """Replace a vehicle's fields; photos are replaced only when given."""
        try:
            existing = await self._vehicle_repo.get_by_id(vehicle_id)
            if existing is None:
                return Result.failure(NotFound("vehicle", vehicle_id))

            if data.photo_urls is None:
                photos = existing.photos
            else:
                photos = [VehiclePhoto(id=None, url=url) for url in data.photo_urls]
            vehicle = _build_vehicle(vehicle_id, data, photos)
            errors = vehicle.validation_errors()
            if errors:
                return Result.failure(ValidationError(errors))

            updated = await self._vehicle_repo.update(vehicle)
        except DomainError as e:
            return Result.failure(e)
        logger.info(f"Vehicle {vehicle_id} updated")
        return Result.success(updated)

    async def delete_vehicle(self, vehicle_id: int) -> Result[None]:
        """Delete a vehicle together with its photos and ratings."""
        try:
            deleted = await self._vehicle_repo.delete(vehicle_id)
        except DomainError as e:
            return Result.failure(e)
        if not deleted:
            return Result.failure(NotFound("vehicle", vehicle_id))
        logger.info(f"Vehicle {vehicle_id} deleted")
        return Result.success(None)

    async def add_photo(self, vehicle_id: int, url: str) -> Result[VehiclePhoto]:
        errors = photo_url_errors(url)
        if errors:
            return Result.failure(ValidationError(errors))
        try:
            photo = await self._vehicle_repo.add_photo(vehicle_id, url)
        except DomainError as e:
            return Result.failure(e)
        return Result.success(photo)

    async def delete_photo(self, vehicle_id: int, photo_id: int) -> Result[None]:
        try:
            deleted = await self._vehicle_repo.delete_photo(vehicle_id, photo_id)
        except DomainError as e:
            return Result.failure(e)
        if not deleted:
            return Result.failure(NotFound("photo", photo_id))
        return Result.success(None)
