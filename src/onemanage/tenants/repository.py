from __future__ import annotations

from typing import Optional, Protocol

from .model import Tenant


class TenantRepository(Protocol):
    def get_by_email(self, email: str) -> Optional[Tenant]:
        raise NotImplementedError

    def create(self, *, name: str, email: str, avatar: Optional[str]) -> Tenant:
        raise NotImplementedError
