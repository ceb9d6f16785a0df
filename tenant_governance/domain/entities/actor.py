"""
Actor Value Object

The authenticated caller, as supplied by the identity collaborator.
Never persisted; ledgers snapshot its id and name.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

SUPERADMIN_ROLE = "superadmin"


class Actor(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    role: str = SUPERADMIN_ROLE
    tenant_id: Optional[str] = None
    ip_address: Optional[str] = None

    @property
    def is_superadmin(self) -> bool:
        return self.role == SUPERADMIN_ROLE


SYSTEM_ACTOR = Actor(id="system", name="Suspension expiry")
