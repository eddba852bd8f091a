from __future__ import annotations

import uuid
from collections import defaultdict
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc
from ..core.enums import TaskPriority
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, placeholders, tenant_id_for
from .model import Assignee, Task, stored_priority
from .repository import TaskRepository

_COLUMN_BY_CHANGE = {
    "title": "title",
    "description": "description",
    "priority": "priority",
    "due_date": "due_date",
}


class MySQLTaskRepository(TaskRepository):
    """Tasks as rows; assignees live in ``task_assignments`` keyed by employee id."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _tenant_id(cur, tenant_email: str) -> str:
        user_id = tenant_id_for(cur, tenant_email)
        if not user_id:
            raise NotFoundError("User not found")
        return user_id

    @staticmethod
    def _assignees(cur, task_ids: Sequence[str]) -> dict[str, list[Assignee]]:
        out: dict[str, list[Assignee]] = defaultdict(list)
        if not task_ids:
            return out
        cur.execute(
            f"""
            SELECT ta.task_id, ta.completed, e.name, e.email
            FROM task_assignments ta
            JOIN employees e ON e.id = ta.employee_id
            WHERE ta.task_id IN ({placeholders(task_ids)})
            ORDER BY ta.assigned_at
            """,
            tuple(task_ids),
        )
        for row in fetchall(cur):
            out[row["task_id"]].append(
                Assignee(email=row["email"], name=row.get("name") or "", completed=bool(row.get("completed")))
            )
        return out

    @staticmethod
    def _write_assignees(cur, user_id: str, task_id: str, assigned: Sequence[Assignee]) -> None:
        cur.execute("DELETE FROM task_assignments WHERE task_id=%s", (task_id,))
        if not assigned:
            return
        emails = [a.email for a in assigned]
        cur.execute(
            f"SELECT id, email FROM employees WHERE user_id=%s AND email IN ({placeholders(emails)})",
            (user_id, *emails),
        )
        employee_ids = {row["email"]: row["id"] for row in fetchall(cur)}
        now = now_utc()
        for assignee in assigned:
            employee_id = employee_ids.get(assignee.email)
            if not employee_id:
                continue
            cur.execute(
                """
                INSERT INTO task_assignments(id, task_id, employee_id, completed, assigned_at, completed_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    str(uuid.uuid4()),
                    task_id,
                    employee_id,
                    int(assignee.completed),
                    now,
                    now if assignee.completed else None,
                ),
            )

    def _select(self, cur, user_id: str, task_id: Optional[str] = None) -> list[Task]:
        sql = """
            SELECT id, title, description, priority, due_date, created_at, updated_at
            FROM tasks
            WHERE user_id=%s
        """
        params: list = [user_id]
        if task_id is not None:
            sql += " AND id=%s"
            params.append(task_id)
        cur.execute(sql + " ORDER BY created_at", tuple(params))
        rows = fetchall(cur)
        assignees = self._assignees(cur, [r["id"] for r in rows])
        return [
            Task(
                task_id=r["id"],
                title=r["title"],
                description=r.get("description") or "",
                priority=stored_priority(r.get("priority")),
                due_date=r.get("due_date"),
                assigned=tuple(assignees.get(r["id"], ())),
                created_at=r.get("created_at"),
                updated_at=r.get("updated_at"),
            )
            for r in rows
        ]

    def list_for_tenant(self, tenant_email: str) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select(cur, self._tenant_id(cur, tenant_email))

    def get(self, tenant_email: str, task_id: str) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            found = self._select(cur, self._tenant_id(cur, tenant_email), task_id)
            return found[0] if found else None

    def create(
        self,
        tenant_email: str,
        *,
        title: str,
        description: str,
        priority: TaskPriority,
        due_date: datetime,
        assigned: Sequence[Assignee],
    ) -> Task:
        task_id = str(uuid.uuid4())
        now = now_utc()
        with db_cursor(self._conn_factory) as (_, cur):
            user_id = self._tenant_id(cur, tenant_email)
            cur.execute(
                """
                INSERT INTO tasks(id, user_id, title, description, priority, due_date, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (task_id, user_id, title, description, priority.value, due_date, now, now),
            )
            self._write_assignees(cur, user_id, task_id, assigned)
            return self._select(cur, user_id, task_id)[0]

    def update(self, tenant_email: str, task_id: str, changes: dict) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            user_id = self._tenant_id(cur, tenant_email)
            if not self._select(cur, user_id, task_id):
                return None

            assignments = ["updated_at=%s"]
            params: list = [now_utc()]
            for key, column in _COLUMN_BY_CHANGE.items():
                if key in changes:
                    value = changes[key]
                    assignments.append(f"{column}=%s")
                    params.append(value.value if isinstance(value, TaskPriority) else value)
            cur.execute(
                f"UPDATE tasks SET {', '.join(assignments)} WHERE id=%s AND user_id=%s",
                (*params, task_id, user_id),
            )
            if "assigned" in changes:
                self._write_assignees(cur, user_id, task_id, changes["assigned"])
            return self._select(cur, user_id, task_id)[0]

    def delete(self, tenant_email: str, task_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            user_id = self._tenant_id(cur, tenant_email)
            cur.execute("DELETE FROM tasks WHERE id=%s AND user_id=%s", (task_id, user_id))
            return cur.rowcount > 0

    def set_completion(self, tenant_email: str, task_id: str, completed: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            user_id = tenant_id_for(cur, tenant_email)
            if not user_id:
                return False
            cur.execute("SELECT id FROM tasks WHERE id=%s AND user_id=%s", (task_id, user_id))
            if not fetchone(cur):
                return False
            cur.execute(
                "UPDATE task_assignments SET completed=%s, completed_at=%s WHERE task_id=%s",
                (int(completed), now_utc() if completed else None, task_id),
            )
            return True
