"""Vehicle domain entity - pure business logic."""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from app.config import settings


class VehicleStatus(str, Enum):
    """Availability of a vehicle in the inventory."""
    AVAILABLE = "Available"
    UNDER_MAINTENANCE = "UnderMaintenance"
    RESERVED = "Reserved"
    UNAVAILABLE = "Unavailable"


@dataclass
class VehiclePhoto:
    """Photo owned by a vehicle."""
    id: Optional[int]
    url: str
    vehicle_id: Optional[int] = None


@dataclass
class VehicleSummary:
    """Public fields of a vehicle, used when joined to a rating."""
    id: int
    name: str
    make: str
    year: int
    plate: str


@dataclass
class Vehicle:
    """Vehicle domain entity."""
    id: Optional[int]
    name: str
    make: str
    year: int
    plate: str
    color: str
    price: Decimal
    mileage: Decimal = Decimal("0")
    status: VehicleStatus = VehicleStatus.AVAILABLE
    description: Optional[str] = None
    photos: List[VehiclePhoto] = field(default_factory=list)

    def validation_errors(self) -> List[str]:
        """Return every business rule the vehicle breaks (empty when valid)."""
        errors = []
        if not self.name or not self.name.strip():
            errors.append("Name cannot be empty")
        elif len(self.name) > settings.VEHICLE_NAME_MAX_LENGTH:
            errors.append(f"Name cannot exceed {settings.VEHICLE_NAME_MAX_LENGTH} characters")
        if not self.make or not self.make.strip():
            errors.append("Make cannot be empty")
        elif len(self.make) > settings.VEHICLE_MAKE_MAX_LENGTH:
            errors.append(f"Make cannot exceed {settings.VEHICLE_MAKE_MAX_LENGTH} characters")
        if self.year < settings.VEHICLE_MIN_YEAR or self.year > settings.VEHICLE_MAX_YEAR:
            errors.append(
                f"Year must be between {settings.VEHICLE_MIN_YEAR} and {settings.VEHICLE_MAX_YEAR}"
            )
        if not self.plate or not self.plate.strip():
            errors.append("Plate cannot be empty")
        elif len(self.plate) > settings.VEHICLE_PLATE_MAX_LENGTH:
            errors.append(f"Plate cannot exceed {settings.VEHICLE_PLATE_MAX_LENGTH} characters")
        if not self.color or not self.color.strip():
            errors.append("Color cannot be empty")
        elif len(self.color) > settings.VEHICLE_COLOR_MAX_LENGTH:
            errors.append(f"Color cannot exceed {settings.VEHICLE_COLOR_MAX_LENGTH} characters")
        if self.price is None or self.price <= 0:
            errors.append("Price must be greater than zero")
        if self.mileage is None or self.mileage < 0:
            errors.append("Mileage cannot be negative")
        if self.description and len(self.description) > settings.VEHICLE_DESCRIPTION_MAX_LENGTH:
            errors.append(
                f"Description cannot exceed {settings.VEHICLE_DESCRIPTION_MAX_LENGTH} characters"
            )
        for photo in self.photos:
            errors.extend(photo_url_errors(photo.url))
        return errors

    def is_valid(self) -> bool:
        """Validate vehicle business rules."""
        return not self.validation_errors()

    def summary(self) -> VehicleSummary:
        return VehicleSummary(
            id=self.id,
            name=self.name,
            make=self.make,
            year=self.year,
            plate=self.plate,
        )


def photo_url_errors(url: Optional[str]) -> List[str]:
    if not url or not url.strip():
        return ["Photo URL cannot be empty"]
    if len(url) > settings.PHOTO_URL_MAX_LENGTH:
        return [f"Photo URL cannot exceed {settings.PHOTO_URL_MAX_LENGTH} characters"]
    return []
