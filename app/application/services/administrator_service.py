"""Administrator account management."""
import logging
from typing import List

from app.application.dto.administrator_dto import AdministratorInput
from app.config import settings
from app.core.security import hash_secret
from app.domain.entities.administrator import Administrator, AdministratorProfile
from app.domain.errors import Conflict, DomainError, NotFound, Result, ValidationError
from app.domain.repositories.administrator_repository import AdministratorRepository

logger = logging.getLogger(__name__)


class AdministratorService:
    """Application service for administrator accounts."""

    def __init__(self, administrator_repository: AdministratorRepository):
        self._administrator_repo = administrator_repository

    async def create_administrator(self, data: AdministratorInput) -> Result[Administrator]:
        errors = []
        if not data.email or not data.email.strip():
            errors.append("Email cannot be empty")
        if not data.secret:
            errors.append("Secret cannot be empty")
        profile = data.profile or AdministratorProfile.EDITOR.value
        if profile not in {p.value for p in AdministratorProfile}:
            errors.append(f"Profile must be one of: {', '.join(p.value for p in AdministratorProfile)}")
        if errors:
            return Result.failure(ValidationError(errors))

        email = data.email.strip()
        try:
            if await self._administrator_repo.get_by_email(email):
                return Result.failure(Conflict(f"Administrator with email '{email}' already exists"))
            created = await self._administrator_repo.create(
                Administrator(id=None, email=email, secret=hash_secret(data.secret), profile=profile)
            )
        except DomainError as e:
            return Result.failure(e)
        logger.info(f"Administrator {created.id} created with profile {created.profile}")
        return Result.success(created)

    async def list_administrators(self, page: int = 1) -> Result[List[Administrator]]:
        page = max(page or 1, 1)
        skip = (page - 1) * settings.ADMIN_PAGE_SIZE
        try:
            return Result.success(
                await self._administrator_repo.list_page(skip=skip, limit=settings.ADMIN_PAGE_SIZE)
            )
        except DomainError as e:
            return Result.failure(e)

    async def get_administrator(self, administrator_id: int) -> Result[Administrator]:
        try:
            administrator = await self._administrator_repo.get_by_id(administrator_id)
        except DomainError as e:
            return Result.failure(e)
        if administrator is None:
            return Result.failure(NotFound("administrator", administrator_id))
        return Result.success(administrator)

    async def delete_administrator(self, administrator_id: int) -> Result[None]:
        """Delete an administrator; refused while any rating references it."""
        try:
            deleted = await self._administrator_repo.delete(administrator_id)
        except DomainError as e:
            logger.warning(f"Could not delete administrator {administrator_id}: {e.message}")
            return Result.failure(e)
        if not deleted:
            return Result.failure(NotFound("administrator", administrator_id))
        logger.info(f"Administrator {administrator_id} deleted")
        return Result.success(None)
