"""Authenticated caller."""

from enum import Enum

from pydantic import BaseModel


class ActorRole(str, Enum):
    """User roles."""

    CUSTOMER = "customer"
    HOTEL_OWNER = "hotel_owner"
    ADMIN = "admin"


class Actor(BaseModel):
    """User on whose behalf an operation runs."""

    id: str
    role: ActorRole
    name: str

    @property
    def is_admin(self) -> bool:
        return self.role == ActorRole.ADMIN
