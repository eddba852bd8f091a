from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta
from typing import Callable

from ..common.datetime_utils import now_utc
from ..core.enums import TaskPriority
from ..departments.repository import DepartmentRepository
from ..employees.repository import EmployeeRepository
from ..tasks.repository import TaskRepository
from ..tenants.service import TenantService

NEW_MEMBER_WINDOW = timedelta(days=15)


class DashboardService:
    """Read-only figures for the tenant's landing page."""

    def __init__(
        self,
        departments: DepartmentRepository,
        employees: EmployeeRepository,
        tasks: TaskRepository,
        tenants: TenantService,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._departments = departments
        self._employees = employees
        self._tasks = tasks
        self._tenants = tenants
        self._clock = clock

    def summary(self, tenant_email: str) -> dict:
        self._tenants.require(tenant_email)
        departments = self._departments.list_for_tenant(tenant_email)
        employees = self._employees.list_for_tenant(tenant_email)
        tasks = self._tasks.list_for_tenant(tenant_email)

        since = self._clock() - NEW_MEMBER_WINDOW
        salaries = [e.salary for e in employees if e.salary is not None]
        added_per_day = Counter(e.added_at.date().isoformat() for e in employees if isinstance(e.added_at, datetime))

        per_priority = {p.value: 0 for p in TaskPriority}
        open_assignments = completed_assignments = 0
        for task in tasks:
            per_priority[task.priority.value] += 1
            for assignee in task.assigned:
                if assignee.completed:
                    completed_assignments += 1
                else:
                    open_assignments += 1

        return {
            "departments": len(departments),
            "employees": len(employees),
            "tasks": len(tasks),
            "newMembers": sum(1 for e in employees if isinstance(e.added_at, datetime) and e.added_at >= since),
            "averageSalary": round(sum(salaries) / len(salaries)) if salaries else 0,
            "tasksByPriority": per_priority,
            "assignments": {"open": open_assignments, "completed": completed_assignments},
            "employeesAddedPerDay": dict(sorted(added_per_day.items())),
        }
