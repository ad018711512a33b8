"""Data Transfer Objects for administrator management."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class AdministratorInput:
    """Fields accepted when creating an administrator."""
    email: str
    secret: str
    profile: Optional[str] = None
