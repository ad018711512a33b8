"""In-memory implementation of VehicleRepository for testing.
Follows Liskov Substitution Principle - can replace any VehicleRepository."""
from typing import Optional, List
from app.domain.entities.vehicle import Vehicle, VehiclePhoto
from app.domain.errors import NotFound
from app.domain.repositories.vehicle_repository import VehicleRepository
from app.infrastructure.persistence.repositories.in_memory_store import InMemoryStore


class InMemoryVehicleRepository(VehicleRepository):
    """In-memory implementation for testing.

    Deleting a vehicle also drops its ratings from the shared store,
    mirroring the ON DELETE CASCADE foreign key.
    """

    def __init__(self, store: InMemoryStore):
        self._store = store

    async def exists(self, vehicle_id: int) -> bool:
        """Check whether a vehicle exists."""
        return vehicle_id in self._store.vehicles

    async def get_by_id(self, vehicle_id: int) -> Optional[Vehicle]:
        """Get vehicle by ID."""
        vehicle = self._store.vehicles.get(vehicle_id)
        return self._store.snapshot(vehicle) if vehicle else None

    async def list_page(self, skip: int = 0, limit: int = 10) -> List[Vehicle]:
        """List vehicles with pagination."""
        ordered = [self._store.vehicles[k] for k in sorted(self._store.vehicles)]
        return [self._store.snapshot(v) for v in ordered[skip:skip + limit]]

    async def create(self, vehicle: Vehicle) -> Vehicle:
        """Create new vehicle."""
        if not vehicle.is_valid():
            raise ValueError("Invalid vehicle")

        stored = self._store.snapshot(vehicle)
        stored.id = self._store.next_id("vehicles")
        for photo in stored.photos:
            photo.id = self._store.next_id("vehicle_photos")
            photo.vehicle_id = stored.id

        self._store.vehicles[stored.id] = stored
        return self._store.snapshot(stored)

    async def update(self, vehicle: Vehicle) -> Vehicle:
        """Update existing vehicle."""
        if vehicle.id is None or vehicle.id not in self._store.vehicles:
            raise NotFound("vehicle", vehicle.id)

        if not vehicle.is_valid():
            raise ValueError("Invalid vehicle")

        stored = self._store.snapshot(vehicle)
        for photo in stored.photos:
            if photo.id is None:
                photo.id = self._store.next_id("vehicle_photos")
            photo.vehicle_id = stored.id
        stored.photos.sort(key=lambda p: p.id)

        self._store.vehicles[stored.id] = stored
        return self._store.snapshot(stored)

    async def delete(self, vehicle_id: int) -> bool:
        """Delete vehicle, cascading to its ratings."""
        if vehicle_id not in self._store.vehicles:
            return False
        del self._store.vehicles[vehicle_id]
        orphaned = [
            rating_id for rating_id, rating in self._store.ratings.items()
            if rating.vehicle_id == vehicle_id
        ]
        for rating_id in orphaned:
            del self._store.ratings[rating_id]
        return True

    async def add_photo(self, vehicle_id: int, url: str) -> VehiclePhoto:
        """Attach a photo to an existing vehicle."""
        vehicle = self._store.vehicles.get(vehicle_id)
        if vehicle is None:
            raise NotFound("vehicle", vehicle_id)
        photo = VehiclePhoto(id=self._store.next_id("vehicle_photos"), url=url, vehicle_id=vehicle_id)
        vehicle.photos.append(photo)
        return self._store.snapshot(photo)

    async def delete_photo(self, vehicle_id: int, photo_id: int) -> bool:
        """Delete a photo of a vehicle."""
        vehicle = self._store.vehicles.get(vehicle_id)
        if vehicle is None:
            return False
        remaining = [p for p in vehicle.photos if p.id != photo_id]
        if len(remaining) == len(vehicle.photos):
            return False
        vehicle.photos = remaining
        return True
