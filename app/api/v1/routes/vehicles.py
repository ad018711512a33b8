"""Vehicle API routes - thin layer delegating to the vehicle service."""
from typing import List
from fastapi import APIRouter, Depends, Query, Response, status

from app.api.dependencies import get_current_admin_id
from app.api.errors import value_or_raise
from app.api.v1.schemas.vehicle_schemas import (
    PhotoCreateSchema,
    VehiclePhotoSchema,
    VehicleSchema,
    VehicleWriteSchema,
)
from app.application.services.vehicle_service import VehicleService
from app.core.dependencies import get_vehicle_service

router = APIRouter(
    prefix="/vehicles",
    tags=["vehicles"],
    dependencies=[Depends(get_current_admin_id)],
)


@router.get("", response_model=List[VehicleSchema])
async def list_vehicles(
    page: int = Query(1, ge=1, description="Page number"),
    service: VehicleService = Depends(get_vehicle_service),
):
    vehicles = value_or_raise(await service.list_vehicles(page))
    return [VehicleSchema.from_entity(v) for v in vehicles]


@router.post("", response_model=VehicleSchema, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    payload: VehicleWriteSchema,
    response: Response,
    service: VehicleService = Depends(get_vehicle_service),
):
    vehicle = value_or_raise(await service.create_vehicle(payload.to_input()))
    response.headers["Location"] = f"/api/v1/vehicles/{vehicle.id}"
    return VehicleSchema.from_entity(vehicle)


@router.get("/{vehicle_id}", response_model=VehicleSchema)
async def get_vehicle(
    vehicle_id: int,
    service: VehicleService = Depends(get_vehicle_service),
):
    return VehicleSchema.from_entity(value_or_raise(await service.get_vehicle(vehicle_id)))


@router.put("/{vehicle_id}", response_model=VehicleSchema)
async def update_vehicle(
    vehicle_id: int,
    payload: VehicleWriteSchema,
    service: VehicleService = Depends(get_vehicle_service),
):
    vehicle = value_or_raise(await service.update_vehicle(vehicle_id, payload.to_input()))
    return VehicleSchema.from_entity(vehicle)


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(
    vehicle_id: int,
    service: VehicleService = Depends(get_vehicle_service),
):
    """Delete a vehicle along with its photos and ratings."""
    value_or_raise(await service.delete_vehicle(vehicle_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{vehicle_id}/photos",
    response_model=VehiclePhotoSchema,
    status_code=status.HTTP_201_CREATED,
)
async def add_vehicle_photo(
    vehicle_id: int,
    payload: PhotoCreateSchema,
    service: VehicleService = Depends(get_vehicle_service),
):
    photo = value_or_raise(await service.add_photo(vehicle_id, payload.url))
    return VehiclePhotoSchema.from_entity(photo)


@router.delete("/{vehicle_id}/photos/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle_photo(
    vehicle_id: int,
    photo_id: int,
    service: VehicleService = Depends(get_vehicle_service),
):
    value_or_raise(await service.delete_photo(vehicle_id, photo_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
