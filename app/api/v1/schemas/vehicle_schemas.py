"""Schemas for vehicle endpoints."""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from app.application.dto.vehicle_dto import VehicleInput
from app.domain.entities.vehicle import Vehicle, VehiclePhoto, VehicleStatus


class VehicleWriteSchema(BaseModel):
    """Body for creating or replacing a vehicle."""
    name: str
    make: str
    year: int
    plate: str
    color: str
    price: Decimal
    mileage: Decimal = Decimal("0")
    status: VehicleStatus = VehicleStatus.AVAILABLE
    description: Optional[str] = None
    photo_urls: Optional[List[str]] = None

    def to_input(self) -> VehicleInput:
        return VehicleInput(**self.model_dump())


class PhotoCreateSchema(BaseModel):
    url: str


class VehiclePhotoSchema(BaseModel):
    id: int
    url: str

    @classmethod
    def from_entity(cls, photo: VehiclePhoto) -> "VehiclePhotoSchema":
        return cls(id=photo.id, url=photo.url)


class VehicleSchema(BaseModel):
    """Vehicle as returned by the API."""
    id: int
    name: str
    make: str
    year: int
    plate: str
    status: VehicleStatus
    color: str
    mileage: float
    price: float
    description: Optional[str] = None
    photos: List[VehiclePhotoSchema] = []

    @classmethod
    def from_entity(cls, vehicle: Vehicle) -> "VehicleSchema":
        return cls(
            id=vehicle.id,
            name=vehicle.name,
            make=vehicle.make,
            year=vehicle.year,
            plate=vehicle.plate,
            status=vehicle.status,
            color=vehicle.color,
            mileage=float(vehicle.mileage),
            price=float(vehicle.price),
            description=vehicle.description,
            photos=[VehiclePhotoSchema.from_entity(p) for p in vehicle.photos],
        )
