"""Repository interfaces."""
from app.domain.repositories.administrator_repository import AdministratorRepository
from app.domain.repositories.rating_repository import RatingRepository
from app.domain.repositories.vehicle_repository import VehicleRepository

__all__ = [
    "AdministratorRepository",
    "RatingRepository",
    "VehicleRepository",
]
