"""Rating repository interface - abstraction for data access."""
from abc import ABC, abstractmethod
from typing import Optional, List
from app.domain.entities.rating import Rating, RatingView
from app.domain.value_objects.rating import RatingSummary


class RatingRepository(ABC):
    """Repository interface for Rating entity.

    Implementations must refuse a second rating for the same
    (vehicle_id, administrator_id) pair by raising Conflict, even when the
    caller already checked, and wrap any other store failure in StorageError.
    """

    @abstractmethod
    async def exists_for(self, vehicle_id: int, administrator_id: int) -> bool:
        """Check whether the administrator already rated the vehicle."""
        pass

    @abstractmethod
    async def add(self, rating: Rating) -> Rating:
        """Insert a rating and return it with its assigned ID."""
        pass

    @abstractmethod
    async def get_view(self, rating_id: int) -> Optional[RatingView]:
        """Get a rating with its author and vehicle."""
        pass

    @abstractmethod
    async def list_for_vehicle(self, vehicle_id: int) -> List[RatingView]:
        """List ratings of a vehicle with their authors, most recent first."""
        pass

    @abstractmethod
    async def summary_for_vehicle(self, vehicle_id: int) -> RatingSummary:
        """Count and average the stars of a vehicle's ratings."""
        pass

    @abstractmethod
    async def delete(self, rating_id: int) -> bool:
        """Delete a rating. Returns False when it does not exist."""
        pass
