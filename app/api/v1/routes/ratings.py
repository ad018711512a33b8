"""Rating API routes - thin layer delegating to the rating engine.
Follows Single Responsibility Principle - only handles HTTP concerns."""
from typing import List, Optional
from fastapi import APIRouter, Body, Depends, Response, status

from app.api.dependencies import get_current_admin_id
from app.api.errors import to_http_exception, value_or_raise
from app.api.v1.schemas.rating_schemas import (
    RatingAverageSchema,
    RatingCreateSchema,
    RatingDetailSchema,
    RatingSchema,
)
from app.application.dto.rating_dto import RatingSubmission
from app.application.services.rating_engine import RatingEngine
from app.core.dependencies import get_rating_engine
from app.domain.errors import NotFound

router = APIRouter(tags=["ratings"])


@router.post(
    "/vehicles/{vehicle_id}/ratings",
    response_model=RatingSchema,
    status_code=status.HTTP_201_CREATED,
)
async def submit_rating(
    vehicle_id: int,
    response: Response,
    payload: Optional[RatingCreateSchema] = Body(None),
    admin_id: int = Depends(get_current_admin_id),
    engine: RatingEngine = Depends(get_rating_engine),
):
    """Rate a vehicle as the authenticated administrator (once per vehicle)."""
    submission = None
    if payload is not None:
        submission = RatingSubmission(stars=payload.stars, comment=payload.comment)

    rating = value_or_raise(await engine.submit_rating(admin_id, vehicle_id, submission))
    response.headers["Location"] = f"/api/v1/ratings/{rating.id}"
    return RatingSchema.from_entity(rating)


@router.get("/vehicles/{vehicle_id}/ratings", response_model=List[RatingDetailSchema])
async def list_vehicle_ratings(
    vehicle_id: int,
    engine: RatingEngine = Depends(get_rating_engine),
):
    """List a vehicle's ratings with their authors, most recent first."""
    views = value_or_raise(await engine.list_ratings_for_vehicle(vehicle_id))
    return [RatingDetailSchema.from_view(v) for v in views]


@router.get("/vehicles/{vehicle_id}/ratings/average", response_model=RatingAverageSchema)
async def get_vehicle_rating_average(
    vehicle_id: int,
    engine: RatingEngine = Depends(get_rating_engine),
):
    """Average stars of a vehicle. ``average`` is null when it has no ratings."""
    summary = value_or_raise(await engine.rating_summary(vehicle_id))
    return RatingAverageSchema(vehicle_id=vehicle_id, average=summary.average, count=summary.count)


@router.get("/ratings/{rating_id}", response_model=RatingDetailSchema)
async def get_rating(
    rating_id: int,
    engine: RatingEngine = Depends(get_rating_engine),
):
    view = value_or_raise(await engine.get_rating_by_id(rating_id))
    if view is None:
        raise to_http_exception(NotFound("rating", rating_id))
    return RatingDetailSchema.from_view(view)


@router.delete("/ratings/{rating_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rating(
    rating_id: int,
    admin_id: int = Depends(get_current_admin_id),
    engine: RatingEngine = Depends(get_rating_engine),
):
    """Delete a rating. Only its author may do so."""
    value_or_raise(await engine.delete_rating(rating_id, admin_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
