from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import optional_text, require_list, require_non_empty
from ..core.constants import DEFAULT_DEPARTMENT_TYPE
from ..core.exceptions import NotFoundError, ValidationError
from ..tenants.service import TenantService
from .model import Department
from .repository import DepartmentRepository

logger = logging.getLogger(__name__)


def _emails(value: Any) -> list[str]:
    emails = require_list(value, "Employee emails required")
    if not all(isinstance(e, str) for e in emails):
        raise ValidationError("Employee emails must be strings")
    return [e.strip() for e in emails if e.strip()]


class DepartmentService:
    """Use case: manage departments and their membership."""

    def __init__(self, departments: DepartmentRepository, tenants: TenantService):
        self._departments = departments
        self._tenants = tenants

    def list(self, tenant_email: str, *, department_id: Optional[str] = None) -> Sequence[Department]:
        self._tenants.require(tenant_email)
        departments = self._departments.list_for_tenant(tenant_email)
        if department_id:
            departments = [d for d in departments if d.department_id == department_id]
        return departments

    def create(self, tenant_email: str, payload: Mapping[str, Any]) -> Department:
        name = require_non_empty(payload.get("name"), "Department name required")
        emails = _emails(payload["employeeEmails"]) if payload.get("employeeEmails") is not None else []

        self._tenants.require(tenant_email)
        department = self._departments.create(
            tenant_email,
            name=name,
            type=optional_text(payload.get("type")) or DEFAULT_DEPARTMENT_TYPE,
            description=optional_text(payload.get("description")) or "",
            professional_details=optional_text(payload.get("professionalDetails")) or "",
        )
        logger.info("tenant %s created department %s", tenant_email, department.department_id)

        if emails:
            self._departments.assign_members(tenant_email, department.department_id, emails)
            department = self._departments.get(tenant_email, department.department_id) or department
        return department

    def update(self, tenant_email: str, payload: Mapping[str, Any]) -> Department:
        department_id = require_non_empty(payload.get("departmentId"), "Department ID required")
        name = require_non_empty(payload.get("name"), "Department name required")
        if payload.get("employeeEmails") is None:
            raise ValidationError("Employee emails required")
        emails = _emails(payload["employeeEmails"])

        self._tenants.require(tenant_email)
        current = self._departments.get(tenant_email, department_id)
        if not current:
            raise NotFoundError("Department not found")

        def pick(key: str, fallback: str) -> str:
            value = optional_text(payload.get(key))
            return fallback if value is None else value

        self._departments.update(
            tenant_email,
            department_id,
            name=name,
            type=pick("type", current.type) or DEFAULT_DEPARTMENT_TYPE,
            description=pick("description", current.description),
            professional_details=pick("professionalDetails", current.professional_details),
        )
        self._departments.assign_members(tenant_email, department_id, emails)
        logger.info("tenant %s updated department %s (%d members)", tenant_email, department_id, len(emails))

        updated = self._departments.get(tenant_email, department_id)
        if not updated:
            raise NotFoundError("Department not found")
        return updated

    def delete(self, tenant_email: str, department_id: Optional[str]) -> bool:
        department_id = require_non_empty(department_id, "Department ID required")
        self._tenants.require(tenant_email)
        deleted = self._departments.delete(tenant_email, department_id)
        logger.info("tenant %s deleted department %s (found=%s)", tenant_email, department_id, deleted)
        return deleted
