"""Schemas for administrator endpoints."""
from typing import Optional

from pydantic import BaseModel

from app.application.dto.administrator_dto import AdministratorInput
from app.domain.entities.administrator import Administrator


class AdministratorCreateSchema(BaseModel):
    email: str
    secret: str
    profile: Optional[str] = None

    def to_input(self) -> AdministratorInput:
        return AdministratorInput(email=self.email, secret=self.secret, profile=self.profile)


class AdministratorSchema(BaseModel):
    """Administrator without its credential."""
    id: int
    email: str
    profile: str

    @classmethod
    def from_entity(cls, administrator: Administrator) -> "AdministratorSchema":
        return cls(id=administrator.id, email=administrator.email, profile=administrator.profile)
