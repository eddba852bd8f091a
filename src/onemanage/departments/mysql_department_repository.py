from __future__ import annotations

import uuid
from collections import defaultdict
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_DEPARTMENT_TYPE
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, placeholders, tenant_id_for
from ..employees.model import Employee
from ..employees.mysql_employee_repository import row_to_employee
from .model import Department
from .repository import DepartmentRepository


class MySQLDepartmentRepository(DepartmentRepository):
    """Departments as rows; their ``employees`` are read back through the foreign key."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _tenant_id(cur, tenant_email: str) -> str:
        user_id = tenant_id_for(cur, tenant_email)
        if not user_id:
            raise NotFoundError("User not found")
        return user_id

    def _select(self, tenant_email: str, department_id: Optional[str] = None) -> list[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            user_id = self._tenant_id(cur, tenant_email)

            sql = """
                SELECT id, name, type, description, professional_details, created_at
                FROM departments
                WHERE user_id=%s
            """
            params: list = [user_id]
            if department_id is not None:
                sql += " AND id=%s"
                params.append(department_id)
            cur.execute(sql + " ORDER BY created_at", tuple(params))
            rows = fetchall(cur)
            if not rows:
                return []

            ids = [r["id"] for r in rows]
            cur.execute(
                f"""
                SELECT id, department_id, name, email, position, phone, salary,
                       gender, date_of_birth, profile_photo, added_at, updated_at
                FROM employees
                WHERE user_id=%s AND department_id IN ({placeholders(ids)})
                ORDER BY added_at
                """,
                (user_id, *ids),
            )
            members: dict[str, list[Employee]] = defaultdict(list)
            for row in fetchall(cur):
                members[row["department_id"]].append(row_to_employee(row))

            return [
                Department(
                    department_id=r["id"],
                    name=r["name"],
                    type=r.get("type") or DEFAULT_DEPARTMENT_TYPE,
                    description=r.get("description") or "",
                    professional_details=r.get("professional_details") or "",
                    employees=tuple(members.get(r["id"], ())),
                    created_at=r.get("created_at"),
                )
                for r in rows
            ]

    def list_for_tenant(self, tenant_email: str) -> Sequence[Department]:
        return self._select(tenant_email)

    def get(self, tenant_email: str, department_id: str) -> Optional[Department]:
        found = self._select(tenant_email, department_id)
        return found[0] if found else None

    def create(
        self,
        tenant_email: str,
        *,
        name: str,
        type: str,
        description: str,
        professional_details: str,
    ) -> Department:
        department_id = str(uuid.uuid4())
        now = now_utc()
        with db_cursor(self._conn_factory) as (_, cur):
            user_id = self._tenant_id(cur, tenant_email)
            cur.execute(
                """
                INSERT INTO departments(id, user_id, name, type, description, professional_details, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (department_id, user_id, name, type, description, professional_details, now, now),
            )
        return Department(
            department_id=department_id,
            name=name,
            type=type,
            description=description,
            professional_details=professional_details,
            created_at=now,
        )

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
        with db_cursor(self._conn_factory) as (_, cur):
            user_id = self._tenant_id(cur, tenant_email)
            cur.execute(
                """
                UPDATE departments
                SET name=%s, type=%s, description=%s, professional_details=%s, updated_at=%s
                WHERE id=%s AND user_id=%s
                """,
                (name, type, description, professional_details, now_utc(), department_id, user_id),
            )
            return cur.rowcount > 0

    def assign_members(self, tenant_email: str, department_id: str, emails: Iterable[str]) -> None:
        emails = list(dict.fromkeys(emails))
        now = now_utc()
        with db_cursor(self._conn_factory) as (_, cur):
            user_id = self._tenant_id(cur, tenant_email)
            if emails:
                cur.execute(
                    f"""
                    UPDATE employees SET department_id=NULL, updated_at=%s
                    WHERE user_id=%s AND department_id=%s AND email NOT IN ({placeholders(emails)})
                    """,
                    (now, user_id, department_id, *emails),
                )
                cur.execute(
                    f"""
                    UPDATE employees SET department_id=%s, updated_at=%s
                    WHERE user_id=%s AND email IN ({placeholders(emails)})
                    """,
                    (department_id, now, user_id, *emails),
                )
            else:
                cur.execute(
                    "UPDATE employees SET department_id=NULL, updated_at=%s WHERE user_id=%s AND department_id=%s",
                    (now, user_id, department_id),
                )

    def delete(self, tenant_email: str, department_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            user_id = self._tenant_id(cur, tenant_email)
            # employees.department_id is cleared by ON DELETE SET NULL
            cur.execute("DELETE FROM departments WHERE id=%s AND user_id=%s", (department_id, user_id))
            return cur.rowcount > 0
