from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_due_date
from ..common.validators import optional_text, require_bool, require_list, require_non_empty
from ..core.enums import TaskPriority
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..tenants.service import TenantService
from .model import Assignee, Task
from .repository import TaskRepository

logger = logging.getLogger(__name__)


def parse_priority(value: Any) -> TaskPriority:
    if value is None or value == "":
        return TaskPriority.LOW
    try:
        return TaskPriority(str(value).strip().capitalize())
    except ValueError:
        raise ValidationError("Priority must be one of Low, Medium, High")


class TaskService:
    """Use case: tasks of a tenant and the public completion link."""

    def __init__(self, tasks: TaskRepository, employees: EmployeeRepository, tenants: TenantService):
        self._tasks = tasks
        self._employees = employees
        self._tenants = tenants

    def _assignees(
        self, tenant_email: str, value: Any, previous: Optional[Mapping[str, bool]] = None
    ) -> tuple[Assignee, ...]:
        """Resolve assignees against the tenant's employees.

        ``completed`` is taken from the item when given, otherwise carried over
        from ``previous`` (the task's current assignees).
        """
        if value is None:
            return ()
        items = require_list(value, "Assigned must be a list")
        known = {e.email: e for e in self._employees.list_for_tenant(tenant_email)}

        out: list[Assignee] = []
        seen: set[str] = set()
        for item in items:
            if isinstance(item, str):
                item = {"email": item}
            if not isinstance(item, Mapping):
                raise ValidationError("Assignee email required")
            email = require_non_empty(item.get("email"), "Assignee email required")
            employee = known.get(email)
            if employee is None:
                raise NotFoundError(f"Employee {email} not found")
            if email in seen:
                continue
            seen.add(email)
            if "completed" in item:
                completed = require_bool(item["completed"], "Assignee completed must be true or false")
            else:
                completed = bool((previous or {}).get(email, False))
            out.append(Assignee(email=email, name=optional_text(item.get("name")) or employee.name, completed=completed))
        return tuple(out)

    def list(self, tenant_email: str) -> Sequence[Task]:
        self._tenants.require(tenant_email)
        return self._tasks.list_for_tenant(tenant_email)

    def get(self, tenant_email: str, task_id: str) -> Task:
        self._tenants.require(tenant_email)
        task = self._tasks.get(tenant_email, task_id)
        if not task:
            raise NotFoundError("Task not found")
        return task

    def create(self, tenant_email: str, payload: Mapping[str, Any]) -> Task:
        title = require_non_empty(payload.get("title"), "Task title required")
        due_date = parse_due_date(payload.get("dueDate"))
        priority = parse_priority(payload.get("priority"))

        self._tenants.require(tenant_email)
        task = self._tasks.create(
            tenant_email,
            title=title,
            description=optional_text(payload.get("description")) or "",
            priority=priority,
            due_date=due_date,
            assigned=self._assignees(tenant_email, payload.get("assigned")),
        )
        logger.info("tenant %s created task %s (%d assignees)", tenant_email, task.task_id, len(task.assigned))
        return task

    def update(self, tenant_email: str, payload: Mapping[str, Any]) -> Task:
        task_id = require_non_empty(payload.get("taskId"), "Task ID required")

        changes: dict[str, Any] = {}
        if "title" in payload:
            changes["title"] = require_non_empty(payload.get("title"), "Task title required")
        if "description" in payload:
            changes["description"] = optional_text(payload.get("description")) or ""
        if "priority" in payload:
            changes["priority"] = parse_priority(payload.get("priority"))
        if "dueDate" in payload:
            changes["due_date"] = parse_due_date(payload.get("dueDate"))

        self._tenants.require(tenant_email)
        if "assigned" in payload:
            current = self._tasks.get(tenant_email, task_id)
            if not current:
                raise NotFoundError("Task not found")
            previous = {a.email: a.completed for a in current.assigned}
            changes["assigned"] = self._assignees(tenant_email, payload.get("assigned") or [], previous)

        task = self._tasks.update(tenant_email, task_id, changes)
        if not task:
            raise NotFoundError("Task not found")
        logger.info("tenant %s updated task %s (%s)", tenant_email, task_id, ", ".join(sorted(changes)) or "no fields")
        return task

    def delete(self, tenant_email: str, task_id: Optional[str]) -> bool:
        task_id = require_non_empty(task_id, "Task ID required")
        self._tenants.require(tenant_email)
        deleted = self._tasks.delete(tenant_email, task_id)
        logger.info("tenant %s deleted task %s (found=%s)", tenant_email, task_id, deleted)
        return deleted

    # Reached from the link in the notification mail, so the tenant is named
    # by the caller instead of the identity proxy.

    def get_public(self, admin_email: Optional[str], task_id: Optional[str]) -> Task:
        admin_email = require_non_empty(admin_email, "admin and task_id required")
        task_id = require_non_empty(task_id, "admin and task_id required")
        try:
            self._tenants.require(admin_email)
        except NotFoundError:
            raise NotFoundError("Admin not found")
        task = self._tasks.get(admin_email, task_id)
        if not task:
            raise NotFoundError("Task not found")
        return task

    def set_completion(self, admin_email: Any, task_id: Any, completed: Any) -> None:
        message = "admin, task_id, and completed required"
        admin_email = require_non_empty(admin_email, message)
        task_id = require_non_empty(task_id, message)
        completed = require_bool(completed, message)

        try:
            self._tenants.require(admin_email)
        except NotFoundError:
            raise NotFoundError("Task or admin not found")
        if not self._tasks.set_completion(admin_email, task_id, completed):
            raise NotFoundError("Task or admin not found")
        logger.info("task %s of %s marked completed=%s", task_id, admin_email, completed)
