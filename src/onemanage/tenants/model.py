from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat
from ..core.enums import TenantRole


@dataclass(frozen=True)
class Tenant:
    """The admin account that owns departments, employees and tasks."""

    tenant_id: str
    name: str
    email: str
    avatar: Optional[str] = None
    role: TenantRole = TenantRole.ADMIN
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "_id": self.tenant_id,
            "name": self.name,
            "email": self.email,
            "avatar": self.avatar,
            "role": self.role.value,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
