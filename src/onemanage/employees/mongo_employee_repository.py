from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.constants import USERS_COLLECTION
from ..database.connection import MongoConnection
from ..database.mongo_base import load_tenant, replace_fields
from .model import Employee
from .repository import EmployeeRepository
from .synchronizer import EmployeeSynchronizer

logger = logging.getLogger(__name__)


class MongoEmployeeRepository(EmployeeRepository):
    """Employees embedded in the tenant document, kept in step by the synchronizer."""

    def __init__(self, conn_factory: MongoConnection, synchronizer: EmployeeSynchronizer):
        self._conn_factory = conn_factory
        self._sync = synchronizer

    def _users(self):
        return self._conn_factory.collection(USERS_COLLECTION)

    def _save(self, users, tenant_email: str, doc: dict) -> None:
        replace_fields(
            users,
            tenant_email,
            employees=doc.get("employees") or [],
            departments=doc.get("departments") or [],
        )

    def list_for_tenant(self, tenant_email: str) -> Sequence[Employee]:
        doc = load_tenant(self._users(), tenant_email, "employees")
        return [Employee.from_document(r) for r in doc.get("employees") or []]

    def get_by_email(self, tenant_email: str, email: str) -> Optional[Employee]:
        for employee in self.list_for_tenant(tenant_email):
            if employee.email == email:
                return employee
        return None

    def add(self, tenant_email: str, fields: dict) -> Employee:
        users = self._users()
        doc = load_tenant(users, tenant_email, "employees", "departments")
        nested = self._sync.add(doc, fields)
        self._save(users, tenant_email, doc)
        if not nested:
            logger.info(
                "department %s not found for tenant %s; %s stored in the flat list only",
                fields.get("department"), tenant_email, fields.get("email"),
            )
        return Employee.from_document(doc["employees"][-1])

    def update(self, tenant_email: str, fields: dict) -> int:
        users = self._users()
        doc = load_tenant(users, tenant_email, "employees", "departments")
        matched = self._sync.update(doc, fields)
        self._save(users, tenant_email, doc)
        return matched

    def remove(self, tenant_email: str, email: str) -> int:
        users = self._users()
        doc = load_tenant(users, tenant_email, "employees", "departments")
        removed = self._sync.remove(doc, email)
        self._save(users, tenant_email, doc)
        return removed

    def list_for_department(self, tenant_email: str, department_id: str) -> Optional[Sequence[Employee]]:
        doc = load_tenant(self._users(), tenant_email, "departments")
        members = self._sync.members(doc, department_id)
        if members is None:
            return None
        return [Employee.from_document(r) for r in members]
