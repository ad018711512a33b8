"""Rating domain entity - a star score one administrator gives one vehicle."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.domain.entities.administrator import AdministratorPublic
from app.domain.entities.vehicle import VehicleSummary


@dataclass
class Rating:
    """Rating domain entity.

    At most one rating exists per (vehicle_id, administrator_id) pair.
    Ratings are immutable once stored.
    """
    id: Optional[int]
    vehicle_id: int
    administrator_id: int
    stars: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

    def is_authored_by(self, administrator_id: int) -> bool:
        return self.administrator_id == administrator_id


@dataclass
class RatingView:
    """A rating joined with its author and, when requested, its vehicle."""
    rating: Rating
    author: AdministratorPublic
    vehicle: Optional[VehicleSummary] = None
