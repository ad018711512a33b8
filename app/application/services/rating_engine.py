"""Rating engine - submission, aggregation and deletion of vehicle ratings.

Every operation returns a ``Result`` instead of raising, so callers must look
at ``result.error.kind`` before using ``result.value``.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from app.application.dto.rating_dto import RatingSubmission
from app.config import settings
from app.domain.entities.rating import Rating, RatingView
from app.domain.errors import (
    Conflict,
    DomainError,
    Forbidden,
    NoRatings,
    NotFound,
    Result,
    StorageError,
    ValidationError,
)
from app.domain.repositories.administrator_repository import AdministratorRepository
from app.domain.repositories.rating_repository import RatingRepository
from app.domain.repositories.vehicle_repository import VehicleRepository
from app.domain.value_objects.rating import RatingSummary, Stars

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the way the store keeps it."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class RatingEngine:
    """Enforces one rating per (administrator, vehicle), aggregates scores,
    orders history and authorizes deletion.

    Depends only on repository abstractions handed in at construction.
    """

    def __init__(
        self,
        vehicle_repository: VehicleRepository,
        administrator_repository: AdministratorRepository,
        rating_repository: RatingRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._vehicle_repo = vehicle_repository
        self._administrator_repo = administrator_repository
        self._rating_repo = rating_repository
        self._clock = clock

    async def vehicle_exists(self, vehicle_id: int) -> Result[bool]:
        """Side-effect-free existence check."""
        try:
            return Result.success(await self._vehicle_repo.exists(vehicle_id))
        except DomainError as e:
            return Result.failure(e)
        except Exception as e:
            logger.error(f"Unexpected error checking vehicle {vehicle_id}: {e}", exc_info=True)
            return Result.failure(StorageError("Error checking the vehicle", cause=e))

    def _validate(self, submission: Optional[RatingSubmission]) -> Optional[ValidationError]:
        if submission is None:
            return ValidationError("Rating data was not provided")
        try:
            Stars(
                submission.stars,
                scale_min=settings.RATING_MIN_STARS,
                scale_max=settings.RATING_MAX_STARS,
            )
        except ValueError:
            return ValidationError(
                f"Rating must be between {settings.RATING_MIN_STARS} "
                f"and {settings.RATING_MAX_STARS} stars"
            )
        if submission.comment and len(submission.comment) > settings.RATING_COMMENT_MAX_LENGTH:
            return ValidationError(
                f"Comment cannot exceed {settings.RATING_COMMENT_MAX_LENGTH} characters"
            )
        return None

    async def submit_rating(
        self,
        caller_admin_id: int,
        vehicle_id: int,
        submission: Optional[RatingSubmission],
    ) -> Result[Rating]:
        """Store the caller's rating of a vehicle.

        Args:
            caller_admin_id: Authenticated administrator submitting the rating
            vehicle_id: Vehicle being rated
            submission: Stars and optional comment

        Returns:
            Result with the stored Rating (ID and timestamp assigned), or
            ValidationError, NotFound, Conflict or StorageError.
        """
        error = self._validate(submission)
        if error:
            logger.warning(f"Rejected rating for vehicle {vehicle_id}: {error.message}")
            return Result.failure(error)

        try:
            if not await self._vehicle_repo.exists(vehicle_id):
                logger.warning(f"Vehicle {vehicle_id} not found")
                return Result.failure(NotFound("vehicle", vehicle_id))

            if not await self._administrator_repo.exists(caller_admin_id):
                logger.warning(f"Administrator {caller_admin_id} not found")
                return Result.failure(NotFound("administrator", caller_admin_id))

            if await self._rating_repo.exists_for(vehicle_id, caller_admin_id):
                logger.warning(
                    f"Administrator {caller_admin_id} already rated vehicle {vehicle_id}"
                )
                return Result.failure(Conflict("duplicate rating"))

            # The store's unique constraint still guards the pair if a
            # concurrent submission slipped in after the check above.
            rating = await self._rating_repo.add(
                Rating(
                    id=None,
                    vehicle_id=vehicle_id,
                    administrator_id=caller_admin_id,
                    stars=submission.stars,
                    comment=submission.comment,
                    created_at=self._clock(),
                )
            )
        except DomainError as e:
            return Result.failure(e)
        except Exception as e:
            logger.error(f"Unexpected error saving rating: {e}", exc_info=True)
            return Result.failure(StorageError("Error saving the rating", cause=e))

        logger.info(
            f"Rating {rating.id} stored: vehicle={vehicle_id} admin={caller_admin_id} "
            f"stars={rating.stars}"
        )
        return Result.success(rating)

    async def list_ratings_for_vehicle(self, vehicle_id: int) -> Result[List[RatingView]]:
        """Ratings of a vehicle with their authors, most recent first.

        An unknown vehicle yields an empty list, not an error.
        """
        try:
            return Result.success(await self._rating_repo.list_for_vehicle(vehicle_id))
        except DomainError as e:
            return Result.failure(e)
        except Exception as e:
            logger.error(f"Unexpected error listing ratings of vehicle {vehicle_id}: {e}", exc_info=True)
            return Result.failure(StorageError("Error loading the ratings", cause=e))

    async def rating_summary(self, vehicle_id: int) -> Result[RatingSummary]:
        """Count and average of a vehicle's ratings (average None when empty)."""
        try:
            return Result.success(await self._rating_repo.summary_for_vehicle(vehicle_id))
        except DomainError as e:
            return Result.failure(e)
        except Exception as e:
            logger.error(f"Unexpected error summarizing ratings of vehicle {vehicle_id}: {e}", exc_info=True)
            return Result.failure(StorageError("Error loading the ratings", cause=e))

    async def average_stars(self, vehicle_id: int) -> Result[float]:
        """Arithmetic mean of a vehicle's stars; NoRatings when it has none."""
        result = await self.rating_summary(vehicle_id)
        if not result.ok:
            return Result.failure(result.error)
        if result.value.count == 0:
            return Result.failure(NoRatings(vehicle_id))
        return Result.success(result.value.average)

    async def get_rating_by_id(self, rating_id: int) -> Result[Optional[RatingView]]:
        """Rating with its vehicle and author; value is None when absent."""
        try:
            return Result.success(await self._rating_repo.get_view(rating_id))
        except DomainError as e:
            return Result.failure(e)
        except Exception as e:
            logger.error(f"Unexpected error loading rating {rating_id}: {e}", exc_info=True)
            return Result.failure(StorageError("Error loading the rating", cause=e))

    async def delete_rating(self, rating_id: int, caller_admin_id: int) -> Result[None]:
        """Delete a rating on behalf of its author.

        Fetches the rating, compares its author with the caller, and only
        then deletes it.
        """
        try:
            view = await self._rating_repo.get_view(rating_id)
            if view is None:
                return Result.failure(NotFound("rating", rating_id))

            if not view.rating.is_authored_by(caller_admin_id):
                logger.warning(
                    f"Administrator {caller_admin_id} tried to delete rating {rating_id} "
                    f"of administrator {view.rating.administrator_id}"
                )
                return Result.failure(Forbidden("Only the author can delete a rating"))

            if not await self._rating_repo.delete(rating_id):
                return Result.failure(NotFound("rating", rating_id))
        except DomainError as e:
            return Result.failure(e)
        except Exception as e:
            logger.error(f"Unexpected error deleting rating {rating_id}: {e}", exc_info=True)
            return Result.failure(StorageError("Error deleting the rating", cause=e))

        logger.info(f"Rating {rating_id} deleted by administrator {caller_admin_id}")
        return Result.success(None)
