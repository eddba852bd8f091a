from __future__ import annotations

import uuid
from typing import Any, Optional, Sequence

from ..common.datetime_utils import isoformat, now_utc
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, tenant_id_for
from .model import Employee
from .repository import EmployeeRepository

COLUMN_BY_FIELD = {
    "name": "name",
    "email": "email",
    "department": "department_id",
    "phone": "phone",
    "salary": "salary",
    "position": "position",
    "gender": "gender",
    "dateOfBirth": "date_of_birth",
    "profilePhoto": "profile_photo",
}

_SELECT = """
    SELECT e.id, e.department_id, e.name, e.email, e.position, e.phone, e.salary,
           e.gender, e.date_of_birth, e.profile_photo, e.added_at, e.updated_at
    FROM employees e
    JOIN users u ON u.id = e.user_id
"""


def row_to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=row["id"],
        email=row["email"],
        name=row.get("name") or "",
        department=row.get("department_id"),
        phone=row.get("phone"),
        salary=row.get("salary"),
        position=row.get("position"),
        gender=row.get("gender"),
        date_of_birth=isoformat(row.get("date_of_birth")),
        profile_photo=row.get("profile_photo"),
        added_at=row.get("added_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    """Normalized employees: one row each, ``department_id`` is the only link."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _tenant_id(cur, tenant_email: str) -> str:
        user_id = tenant_id_for(cur, tenant_email)
        if not user_id:
            raise NotFoundError("User not found")
        return user_id

    @staticmethod
    def _existing_department(cur, user_id: str, department_id: Any) -> Optional[str]:
        # A dangling reference is stored as NULL, never rejected.
        if not department_id:
            return None
        cur.execute("SELECT id FROM departments WHERE id=%s AND user_id=%s", (department_id, user_id))
        row = fetchone(cur)
        return row["id"] if row else None

    def list_for_tenant(self, tenant_email: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE u.email=%s ORDER BY e.added_at", (tenant_email,))
            return [row_to_employee(r) for r in fetchall(cur)]

    def get_by_email(self, tenant_email: str, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE u.email=%s AND e.email=%s LIMIT 1", (tenant_email, email))
            row = fetchone(cur)
            return row_to_employee(row) if row else None

    def add(self, tenant_email: str, fields: dict) -> Employee:
        now = now_utc()
        employee_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            user_id = self._tenant_id(cur, tenant_email)
            department_id = self._existing_department(cur, user_id, fields.get("department"))
            cur.execute(
                """
                INSERT INTO employees
                    (id, user_id, department_id, name, email, position, phone, salary,
                     gender, date_of_birth, profile_photo, added_at, updated_at)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee_id,
                    user_id,
                    department_id,
                    fields.get("name") or "",
                    fields["email"],
                    fields.get("position"),
                    fields.get("phone"),
                    fields.get("salary"),
                    fields.get("gender"),
                    fields.get("dateOfBirth"),
                    fields.get("profilePhoto"),
                    now,
                    now,
                ),
            )
        return Employee(
            employee_id=employee_id,
            email=fields["email"],
            name=fields.get("name") or "",
            department=department_id,
            phone=fields.get("phone"),
            salary=fields.get("salary"),
            position=fields.get("position"),
            gender=fields.get("gender"),
            date_of_birth=fields.get("dateOfBirth"),
            profile_photo=fields.get("profilePhoto"),
            added_at=now,
            updated_at=now,
        )

    def update(self, tenant_email: str, fields: dict) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            user_id = self._tenant_id(cur, tenant_email)

            assignments: list[str] = []
            params: list[Any] = []
            for key, value in fields.items():
                if key == "email" or key not in COLUMN_BY_FIELD:
                    continue
                if key == "department":
                    value = self._existing_department(cur, user_id, value)
                assignments.append(f"{COLUMN_BY_FIELD[key]}=%s")
                params.append(value)
            assignments.append("updated_at=%s")
            params.append(now_utc())

            cur.execute(
                f"UPDATE employees SET {', '.join(assignments)} WHERE user_id=%s AND email=%s",
                (*params, user_id, fields["email"]),
            )
            return int(cur.rowcount)

    def remove(self, tenant_email: str, email: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            user_id = self._tenant_id(cur, tenant_email)
            cur.execute("DELETE FROM employees WHERE user_id=%s AND email=%s", (user_id, email))
            return int(cur.rowcount)

    def list_for_department(self, tenant_email: str, department_id: str) -> Optional[Sequence[Employee]]:
        with db_cursor(self._conn_factory) as (_, cur):
            user_id = self._tenant_id(cur, tenant_email)
            if not self._existing_department(cur, user_id, department_id):
                return None
            cur.execute(_SELECT + " WHERE u.id=%s AND e.department_id=%s ORDER BY e.added_at", (user_id, department_id))
            return [row_to_employee(r) for r in fetchall(cur)]
