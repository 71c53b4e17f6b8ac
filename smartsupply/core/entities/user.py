"""User accounts and the authenticated principal."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from smartsupply.core.entities.common import new_id, utc_now


class Role(str, Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    WAREHOUSE_OP = "WAREHOUSE_OP"
    PROCUREMENT = "PROCUREMENT"


class User(BaseModel):
    """A back-office user account."""

    id: str = Field(default_factory=new_id)
    email: str
    password_hash: str
    first_name: str | None = None
    last_name: str | None = None
    role: Role = Role.WAREHOUSE_OP
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)


class CurrentUser(BaseModel):
    """The caller of a request, resolved once from the bearer token."""

    id: str
    email: str
    role: Role

    model_config = {"frozen": True}

    @classmethod
    def from_user(cls, user: User) -> "CurrentUser":
        return cls(id=user.id, email=user.email, role=user.role)
