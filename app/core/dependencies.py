"""Dependency injection for FastAPI routes.
Follows Dependency Inversion Principle - routes depend on abstractions.

Every request gets its own session from ``get_db``; repositories and
services are built on top of it and discarded with the request.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from app.application.services.administrator_service import AdministratorService
from app.application.services.rating_engine import RatingEngine
from app.application.services.vehicle_service import VehicleService
from app.infrastructure.persistence.db import get_db
from app.infrastructure.persistence.repositories.sqlalchemy_administrator_repository import (
    SQLAlchemyAdministratorRepository,
)
from app.infrastructure.persistence.repositories.sqlalchemy_rating_repository import (
    SQLAlchemyRatingRepository,
)
from app.infrastructure.persistence.repositories.sqlalchemy_vehicle_repository import (
    SQLAlchemyVehicleRepository,
)


def get_rating_engine(db: Session = Depends(get_db)) -> RatingEngine:
    """Get rating engine bound to the request session."""
    return RatingEngine(
        vehicle_repository=SQLAlchemyVehicleRepository(db),
        administrator_repository=SQLAlchemyAdministratorRepository(db),
        rating_repository=SQLAlchemyRatingRepository(db),
    )


def get_vehicle_service(db: Session = Depends(get_db)) -> VehicleService:
    """Get vehicle service bound to the request session."""
    return VehicleService(vehicle_repository=SQLAlchemyVehicleRepository(db))


def get_administrator_service(db: Session = Depends(get_db)) -> AdministratorService:
    """Get administrator service bound to the request session."""
    return AdministratorService(administrator_repository=SQLAlchemyAdministratorRepository(db))
