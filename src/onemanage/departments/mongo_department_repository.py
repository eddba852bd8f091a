from __future__ import annotations

import uuid
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..core.constants import USERS_COLLECTION
from ..database.connection import MongoConnection
from ..database.mongo_base import load_tenant, push_item, replace_fields
from ..employees.synchronizer import EmployeeSynchronizer
from .model import Department
from .repository import DepartmentRepository


class MongoDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: MongoConnection, synchronizer: EmployeeSynchronizer):
        self._conn_factory = conn_factory
        self._sync = synchronizer

    def _users(self):
        return self._conn_factory.collection(USERS_COLLECTION)

    def list_for_tenant(self, tenant_email: str) -> Sequence[Department]:
        doc = load_tenant(self._users(), tenant_email, "departments")
        return [Department.from_document(d) for d in doc.get("departments") or []]

    def get(self, tenant_email: str, department_id: str) -> Optional[Department]:
        for department in self.list_for_tenant(tenant_email):
            if department.department_id == department_id:
                return department
        return None

    def create(
        self,
        tenant_email: str,
        *,
        name: str,
        type: str,
        description: str,
        professional_details: str,
    ) -> Department:
        users = self._users()
        load_tenant(users, tenant_email, "email")
        doc = {
            "_id": str(uuid.uuid4()),
            "name": name,
            "type": type,
            "description": description,
            "professionalDetails": professional_details,
            "employees": [],
            "createdAt": now_utc(),
        }
        push_item(users, tenant_email, "departments", doc)
        return Department.from_document(doc)

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
        users = self._users()
        doc = load_tenant(users, tenant_email, "departments")
        found = False
        departments = []
        for department in doc.get("departments") or []:
            if department.get("_id") == department_id:
                department = {
                    **department,
                    "name": name,
                    "type": type,
                    "description": description,
                    "professionalDetails": professional_details,
                }
                found = True
            departments.append(department)
        if found:
            replace_fields(users, tenant_email, departments=departments)
        return found

    def assign_members(self, tenant_email: str, department_id: str, emails: Iterable[str]) -> None:
        users = self._users()
        doc = load_tenant(users, tenant_email, "employees", "departments")
        self._sync.assign(doc, department_id, emails)
        replace_fields(users, tenant_email, employees=doc["employees"], departments=doc["departments"])

    def delete(self, tenant_email: str, department_id: str) -> bool:
        users = self._users()
        doc = load_tenant(users, tenant_email, "employees", "departments")
        if not self._sync.remove_department(doc, department_id):
            return False
        replace_fields(users, tenant_email, employees=doc["employees"], departments=doc["departments"])
        return True
