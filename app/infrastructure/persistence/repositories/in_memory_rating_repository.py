"""In-memory implementation of RatingRepository for testing.
Follows Liskov Substitution Principle - can replace any RatingRepository."""
from typing import Optional, List
from app.domain.entities.rating import Rating, RatingView
from app.domain.errors import Conflict, StorageError
from app.domain.repositories.rating_repository import RatingRepository
from app.domain.value_objects.rating import RatingSummary
from app.infrastructure.persistence.repositories.in_memory_store import InMemoryStore


class InMemoryRatingRepository(RatingRepository):
    """In-memory implementation for testing.

    ``add`` checks and inserts without awaiting, so it cannot interleave
    with another ``add`` on the same event loop.
    """

    def __init__(self, store: InMemoryStore):
        self._store = store

    def _find(self, vehicle_id: int, administrator_id: int) -> Optional[Rating]:
        for rating in self._store.ratings.values():
            if rating.vehicle_id == vehicle_id and rating.administrator_id == administrator_id:
                return rating
        return None

    def _view(self, rating: Rating, with_vehicle: bool = False) -> RatingView:
        author = self._store.administrators[rating.administrator_id].public()
        vehicle = None
        if with_vehicle:
            vehicle = self._store.vehicles[rating.vehicle_id].summary()
        return RatingView(rating=self._store.snapshot(rating), author=author, vehicle=vehicle)

    async def exists_for(self, vehicle_id: int, administrator_id: int) -> bool:
        """Check whether the administrator already rated the vehicle."""
        return self._find(vehicle_id, administrator_id) is not None

    async def add(self, rating: Rating) -> Rating:
        """Insert a rating."""
        # Foreign keys
        if rating.vehicle_id not in self._store.vehicles:
            raise StorageError(f"vehicle {rating.vehicle_id} does not exist")
        if rating.administrator_id not in self._store.administrators:
            raise StorageError(f"administrator {rating.administrator_id} does not exist")

        # Unique (vehicle_id, administrator_id)
        if self._find(rating.vehicle_id, rating.administrator_id):
            raise Conflict("duplicate rating")

        stored = self._store.snapshot(rating)
        stored.id = self._store.next_id("vehicle_ratings")
        self._store.ratings[stored.id] = stored
        return self._store.snapshot(stored)

    async def get_view(self, rating_id: int) -> Optional[RatingView]:
        """Get a rating with its author and vehicle."""
        rating = self._store.ratings.get(rating_id)
        return self._view(rating, with_vehicle=True) if rating else None

    async def list_for_vehicle(self, vehicle_id: int) -> List[RatingView]:
        """List ratings of a vehicle, most recent first."""
        ratings = [r for r in self._store.ratings.values() if r.vehicle_id == vehicle_id]
        ratings.sort(key=lambda r: (r.created_at, r.id), reverse=True)
        return [self._view(r) for r in ratings]

    async def summary_for_vehicle(self, vehicle_id: int) -> RatingSummary:
        """Count and average the stars of a vehicle's ratings."""
        stars = [r.stars for r in self._store.ratings.values() if r.vehicle_id == vehicle_id]
        if not stars:
            return RatingSummary(count=0)
        return RatingSummary(count=len(stars), average=sum(stars) / len(stars))

    async def delete(self, rating_id: int) -> bool:
        """Delete a rating."""
        if rating_id not in self._store.ratings:
            return False
        del self._store.ratings[rating_id]
        return True
