"""Vehicle repository interface - abstraction for data access."""
from abc import ABC, abstractmethod
from typing import Optional, List
from app.domain.entities.vehicle import Vehicle, VehiclePhoto


class VehicleRepository(ABC):
    """Repository interface for Vehicle entity and the photos it owns.

    Deleting a vehicle removes its photos and its ratings.
    """

    @abstractmethod
    async def exists(self, vehicle_id: int) -> bool:
        """Check whether a vehicle exists."""
        pass

    @abstractmethod
    async def get_by_id(self, vehicle_id: int) -> Optional[Vehicle]:
        """Get vehicle by ID, photos included."""
        pass

    @abstractmethod
    async def list_page(self, skip: int = 0, limit: int = 10) -> List[Vehicle]:
        """List vehicles ordered by ID."""
        pass

    @abstractmethod
    async def create(self, vehicle: Vehicle) -> Vehicle:
        """Create new vehicle together with its photos."""
        pass

    @abstractmethod
    async def update(self, vehicle: Vehicle) -> Vehicle:
        """Update existing vehicle.

        Photos without an ID are added; stored photos missing from
        ``vehicle.photos`` are removed.
        """
        pass

    @abstractmethod
    async def delete(self, vehicle_id: int) -> bool:
        """Delete vehicle. Returns False when it does not exist."""
        pass

    @abstractmethod
    async def add_photo(self, vehicle_id: int, url: str) -> VehiclePhoto:
        """Attach a photo to an existing vehicle."""
        pass

    @abstractmethod
    async def delete_photo(self, vehicle_id: int, photo_id: int) -> bool:
        """Delete a photo of a vehicle. Returns False when it does not exist."""
        pass
