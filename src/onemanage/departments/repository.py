from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Department


class DepartmentRepository(Protocol):
    def list_for_tenant(self, tenant_email: str) -> Sequence[Department]:
        raise NotImplementedError

    def get(self, tenant_email: str, department_id: str) -> Optional[Department]:
        raise NotImplementedError

    def create(
        self,
        tenant_email: str,
        *,
        name: str,
        type: str,
        description: str,
        professional_details: str,
    ) -> Department:
        raise NotImplementedError

    def update(
        self,
        tenant_email: str,
        department_id: str,
        *,
        name: str,
        type: str,
        description: str,
        professional_details: str,
    ) -> bool:
        raise NotImplementedError

    def assign_members(self, tenant_email: str, department_id: str, emails: Iterable[str]) -> None:
        """Make ``emails`` the exact membership of the department."""
        raise NotImplementedError

    def delete(self, tenant_email: str, department_id: str) -> bool:
        raise NotImplementedError
