"""Pydantic schemas for rating endpoints."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from app.domain.entities.rating import Rating, RatingView


class RatingCreateSchema(BaseModel):
    """Body of a rating submission. Ranges are checked by the rating engine."""
    stars: int
    comment: Optional[str] = None


class RatingSchema(BaseModel):
    """A stored rating."""
    id: int
    vehicle_id: int
    administrator_id: int
    stars: int
    comment: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, rating: Rating) -> "RatingSchema":
        return cls(
            id=rating.id,
            vehicle_id=rating.vehicle_id,
            administrator_id=rating.administrator_id,
            stars=rating.stars,
            comment=rating.comment,
            created_at=rating.created_at,
        )


class RatingAuthorSchema(BaseModel):
    """Public fields of the administrator who wrote a rating."""
    id: int
    email: str
    profile: str


class RatingVehicleSchema(BaseModel):
    """Vehicle a rating refers to."""
    id: int
    name: str
    make: str
    year: int
    plate: str


class RatingDetailSchema(RatingSchema):
    """Rating joined with its author and, for single lookups, its vehicle."""
    author: RatingAuthorSchema
    vehicle: Optional[RatingVehicleSchema] = None

    @classmethod
    def from_view(cls, view: RatingView) -> "RatingDetailSchema":
        base = RatingSchema.from_entity(view.rating).model_dump()
        vehicle = None
        if view.vehicle is not None:
            vehicle = RatingVehicleSchema(
                id=view.vehicle.id,
                name=view.vehicle.name,
                make=view.vehicle.make,
                year=view.vehicle.year,
                plate=view.vehicle.plate,
            )
        return cls(
            **base,
            author=RatingAuthorSchema(
                id=view.author.id, email=view.author.email, profile=view.author.profile
            ),
            vehicle=vehicle,
        )


class RatingAverageSchema(BaseModel):
    """Average stars of a vehicle; average is null while it has no ratings."""
    vehicle_id: int
    average: Optional[float] = None
    count: int
