from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import require_email, require_non_empty
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..tenants.service import TenantService
from .model import Employee, normalize_employee_fields, require_employee_email
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: manage the employees of the signed-in tenant."""

    def __init__(self, employees: EmployeeRepository, tenants: TenantService):
        self._employees = employees
        self._tenants = tenants

    def list(self, tenant_email: str) -> Sequence[Employee]:
        self._tenants.require(tenant_email)
        return self._employees.list_for_tenant(tenant_email)

    def add(self, tenant_email: str, payload: Mapping[str, Any]) -> Employee:
        fields = normalize_employee_fields(payload)
        if not fields.get("email") or not fields.get("department"):
            raise ValidationError("Employee email and department required")
        require_email(fields["email"], "Invalid employee email")

        self._tenants.require(tenant_email)
        if self._employees.get_by_email(tenant_email, fields["email"]):
            raise ConflictError("Employee with this email already exists")

        employee = self._employees.add(tenant_email, fields)
        logger.info("tenant %s added employee %s", tenant_email, employee.email)
        return employee

    def update(self, tenant_email: str, payload: Mapping[str, Any]) -> Optional[Employee]:
        """Merge the payload into the employee it names; None when nothing matched."""
        fields = normalize_employee_fields(payload)
        email = require_employee_email(fields)

        self._tenants.require(tenant_email)
        matched = self._employees.update(tenant_email, fields)
        logger.info("tenant %s updated employee %s (matched=%s)", tenant_email, email, matched)
        if not matched:
            return None
        return self._employees.get_by_email(tenant_email, email)

    def remove(self, tenant_email: str, email: Optional[str]) -> int:
        email = require_non_empty(email, "Employee email required")
        self._tenants.require(tenant_email)
        removed = self._employees.remove(tenant_email, email)
        logger.info("tenant %s removed employee %s (removed=%s)", tenant_email, email, removed)
        return removed

    def members(self, tenant_email: str, department_id: str) -> Sequence[Employee]:
        department_id = require_non_empty(department_id, "Department ID required")
        self._tenants.require(tenant_email)
        members = self._employees.list_for_department(tenant_email, department_id)
        if members is None:
            raise NotFoundError("Department not found")
        return members
