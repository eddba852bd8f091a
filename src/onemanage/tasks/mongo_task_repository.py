from __future__ import annotations

import dataclasses
import uuid
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc
from ..core.constants import USERS_COLLECTION
from ..core.enums import TaskPriority
from ..database.connection import MongoConnection
from ..database.mongo_base import load_tenant, push_item, replace_fields
from .model import Assignee, Task
from .repository import TaskRepository


class MongoTaskRepository(TaskRepository):
    def __init__(self, conn_factory: MongoConnection):
        self._conn_factory = conn_factory

    def _users(self):
        return self._conn_factory.collection(USERS_COLLECTION)

    def _load(self, users, tenant_email: str) -> list[dict]:
        return list(load_tenant(users, tenant_email, "tasks").get("tasks") or [])

    def list_for_tenant(self, tenant_email: str) -> Sequence[Task]:
        return [Task.from_document(t) for t in self._load(self._users(), tenant_email)]

    def get(self, tenant_email: str, task_id: str) -> Optional[Task]:
        for doc in self._load(self._users(), tenant_email):
            if str(doc.get("_id")) == task_id:
                return Task.from_document(doc)
        return None

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
        users = self._users()
        load_tenant(users, tenant_email, "email")
        now = now_utc()
        task = Task(
            task_id=str(uuid.uuid4()),
            title=title,
            description=description,
            priority=priority,
            due_date=due_date,
            assigned=tuple(assigned),
            created_at=now,
            updated_at=now,
        )
        push_item(users, tenant_email, "tasks", task.to_document())
        return task

    def update(self, tenant_email: str, task_id: str, changes: dict) -> Optional[Task]:
        users = self._users()
        updated: Optional[Task] = None
        docs = []
        for doc in self._load(users, tenant_email):
            if str(doc.get("_id")) == task_id:
                updated = dataclasses.replace(Task.from_document(doc), **changes, updated_at=now_utc())
                doc = {**doc, **updated.to_document()}
            docs.append(doc)
        if updated is not None:
            replace_fields(users, tenant_email, tasks=docs)
        return updated

    def delete(self, tenant_email: str, task_id: str) -> bool:
        users = self._users()
        docs = self._load(users, tenant_email)
        kept = [doc for doc in docs if str(doc.get("_id")) != task_id]
        if len(kept) == len(docs):
            return False
        replace_fields(users, tenant_email, tasks=kept)
        return True

    def set_completion(self, tenant_email: str, task_id: str, completed: bool) -> bool:
        users = self._users()
        found = False
        docs = []
        for doc in self._load(users, tenant_email):
            if str(doc.get("_id")) == task_id:
                doc = {**doc, "assigned": [{**a, "completed": completed} for a in doc.get("assigned") or []]}
                found = True
            docs.append(doc)
        if found:
            replace_fields(users, tenant_email, tasks=docs)
        return found
