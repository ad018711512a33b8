"""Test data factories shared by the test modules."""
from decimal import Decimal

import jwt

from app.config import settings
from app.domain.entities.administrator import Administrator
from app.domain.entities.vehicle import Vehicle, VehiclePhoto


def sample_vehicle(**overrides) -> Vehicle:
    """Valid vehicle entity for testing."""
    data = {
        "id": None,
        "name": "Corolla XEi",
        "make": "Toyota",
        "year": 2022,
        "plate": "ABC1D23",
        "color": "Silver",
        "price": Decimal("125000.00"),
        "mileage": Decimal("15000.50"),
        "description": "Single owner",
        "photos": [VehiclePhoto(id=None, url="https://example.com/corolla-front.jpg")],
    }
    data.update(overrides)
    return Vehicle(**data)


def sample_administrator(email: str = "admin@example.com", profile: str = "Adm") -> Administrator:
    """Administrator entity with a placeholder credential hash."""
    return Administrator(id=None, email=email, secret="$2b$12$placeholderhash", profile=profile)


def make_token(subject, secret: str = None) -> str:
    """Signed bearer token whose subject is the administrator ID."""
    return jwt.encode(
        {"sub": str(subject)},
        secret or settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )
