"""Administrator domain entity."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AdministratorProfile(str, Enum):
    """Role labels an administrator can hold."""
    ADM = "Adm"
    EDITOR = "Editor"


@dataclass
class AdministratorPublic:
    """Fields of an administrator that may be shown next to their ratings."""
    id: int
    email: str
    profile: str


@dataclass
class Administrator:
    """Administrator domain entity.

    ``secret`` holds the stored credential hash and is never exposed by the API.
    """
    id: Optional[int]
    email: str
    secret: str
    profile: str = AdministratorProfile.EDITOR.value

    def is_valid(self) -> bool:
        """Validate administrator business rules."""
        return bool(
            self.email and
            self.email.strip() and
            self.secret and
            self.profile in {p.value for p in AdministratorProfile}
        )

    def public(self) -> AdministratorPublic:
        return AdministratorPublic(id=self.id, email=self.email, profile=self.profile)
