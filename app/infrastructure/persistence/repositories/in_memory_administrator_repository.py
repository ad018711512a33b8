"""In-memory implementation of AdministratorRepository for testing.
Follows Liskov Substitution Principle - can replace any AdministratorRepository."""
from typing import Optional, List
from app.domain.entities.administrator import Administrator
from app.domain.errors import Conflict
from app.domain.repositories.administrator_repository import AdministratorRepository
from app.infrastructure.persistence.repositories.in_memory_store import InMemoryStore


class InMemoryAdministratorRepository(AdministratorRepository):
    """In-memory implementation for testing."""

    def __init__(self, store: InMemoryStore):
        self._store = store

    async def exists(self, administrator_id: int) -> bool:
        """Check whether an administrator exists."""
        return administrator_id in self._store.administrators

    async def get_by_id(self, administrator_id: int) -> Optional[Administrator]:
        """Get administrator by ID."""
        administrator = self._store.administrators.get(administrator_id)
        return self._store.snapshot(administrator) if administrator else None

    async def get_by_email(self, email: str) -> Optional[Administrator]:
        """Get administrator by email."""
        for administrator in self._store.administrators.values():
            if administrator.email == email:
                return self._store.snapshot(administrator)
        return None

    async def list_page(self, skip: int = 0, limit: int = 10) -> List[Administrator]:
        """List administrators with pagination."""
        ordered = [self._store.administrators[k] for k in sorted(self._store.administrators)]
        return [self._store.snapshot(a) for a in ordered[skip:skip + limit]]

    async def create(self, administrator: Administrator) -> Administrator:
        """Create new administrator."""
        if not administrator.is_valid():
            raise ValueError("Invalid administrator")

        # Check for duplicate email
        if await self.get_by_email(administrator.email):
            raise Conflict(f"Administrator with email '{administrator.email}' already exists")

        stored = self._store.snapshot(administrator)
        stored.id = self._store.next_id("administrators")
        self._store.administrators[stored.id] = stored
        return self._store.snapshot(stored)

    async def delete(self, administrator_id: int) -> bool:
        """Delete administrator unless ratings still reference it."""
        if administrator_id not in self._store.administrators:
            return False
        if any(r.administrator_id == administrator_id for r in self._store.ratings.values()):
            raise Conflict(f"Administrator {administrator_id} still has ratings")
        del self._store.administrators[administrator_id]
        return True
