"""Administrator API routes."""
from typing import List
from fastapi import APIRouter, Depends, Query, Response, status

from app.api.dependencies import get_current_admin_id
from app.api.errors import value_or_raise
from app.api.v1.schemas.administrator_schemas import AdministratorCreateSchema, AdministratorSchema
from app.application.services.administrator_service import AdministratorService
from app.core.dependencies import get_administrator_service

router = APIRouter(
    prefix="/administrators",
    tags=["administrators"],
    dependencies=[Depends(get_current_admin_id)],
)


@router.get("", response_model=List[AdministratorSchema])
async def list_administrators(
    page: int = Query(1, ge=1, description="Page number"),
    service: AdministratorService = Depends(get_administrator_service),
):
    administrators = value_or_raise(await service.list_administrators(page))
    return [AdministratorSchema.from_entity(a) for a in administrators]


@router.post("", response_model=AdministratorSchema, status_code=status.HTTP_201_CREATED)
async def create_administrator(
    payload: AdministratorCreateSchema,
    service: AdministratorService = Depends(get_administrator_service),
):
    administrator = value_or_raise(await service.create_administrator(payload.to_input()))
    return AdministratorSchema.from_entity(administrator)


@router.get("/{admin_id}", response_model=AdministratorSchema)
async def get_administrator(
    admin_id: int,
    service: AdministratorService = Depends(get_administrator_service),
):
    return AdministratorSchema.from_entity(value_or_raise(await service.get_administrator(admin_id)))


@router.delete("/{admin_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_administrator(
    admin_id: int,
    service: AdministratorService = Depends(get_administrator_service),
):
    """Delete an administrator. Refused with 409 while their ratings exist."""
    value_or_raise(await service.delete_administrator(admin_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
