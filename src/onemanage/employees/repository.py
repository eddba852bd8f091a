from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for a tenant's employees.

    ``fields`` arguments use the wire keys of ``EMPLOYEE_FIELDS`` and always
    carry ``email``; services validate them before calling in.
    """

    def list_for_tenant(self, tenant_email: str) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_email(self, tenant_email: str, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def add(self, tenant_email: str, fields: dict) -> Employee:
        raise NotImplementedError

    def update(self, tenant_email: str, fields: dict) -> int:
        raise NotImplementedError

    def remove(self, tenant_email: str, email: str) -> int:
        raise NotImplementedError

    def list_for_department(self, tenant_email: str, department_id: str) -> Optional[Sequence[Employee]]:
        """Members of a department, or None when the department does not exist."""
        raise NotImplementedError
