"""Data Transfer Objects for vehicle management."""
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from app.domain.entities.vehicle import VehicleStatus


@dataclass
class VehicleInput:
    """Fields accepted when creating or updating a vehicle.

    ``photo_urls`` of None leaves existing photos untouched on update.
    """
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
