from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import TaskPriority
from .model import Assignee, Task


class TaskRepository(Protocol):
    """Repository interface for a tenant's tasks.

    ``changes`` passed to ``update`` only holds the attributes being replaced:
    any of ``title``, ``description``, ``priority``, ``due_date``, ``assigned``.
    """

    def list_for_tenant(self, tenant_email: str) -> Sequence[Task]:
        raise NotImplementedError

    def get(self, tenant_email: str, task_id: str) -> Optional[Task]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update(self, tenant_email: str, task_id: str, changes: dict) -> Optional[Task]:
        raise NotImplementedError

    def delete(self, tenant_email: str, task_id: str) -> bool:
        raise NotImplementedError

    def set_completion(self, tenant_email: str, task_id: str, completed: bool) -> bool:
        """Set ``completed`` on every assignee; False when the task is missing."""
        raise NotImplementedError
