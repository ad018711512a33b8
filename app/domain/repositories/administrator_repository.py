"""Administrator repository interface - abstraction for data access."""
from abc import ABC, abstractmethod
from typing import Optional, List
from app.domain.entities.administrator import Administrator


class AdministratorRepository(ABC):
    """Repository interface for Administrator entity."""

    @abstractmethod
    async def exists(self, administrator_id: int) -> bool:
        """Check whether an administrator exists."""
        pass

    @abstractmethod
    async def get_by_id(self, administrator_id: int) -> Optional[Administrator]:
        """Get administrator by ID."""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Administrator]:
        """Get administrator by email."""
        pass

    @abstractmethod
    async def list_page(self, skip: int = 0, limit: int = 10) -> List[Administrator]:
        """List administrators ordered by ID."""
        pass

    @abstractmethod
    async def create(self, administrator: Administrator) -> Administrator:
        """Create new administrator. Raises Conflict on a duplicate email."""
        pass

    @abstractmethod
    async def delete(self, administrator_id: int) -> bool:
        """Delete administrator.

        Returns False when it does not exist. Raises Conflict while any
        rating references the administrator.
        """
        pass
