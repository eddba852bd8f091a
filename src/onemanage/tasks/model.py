from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import isoformat
from ..core.enums import TaskPriority


@dataclass(frozen=True)
class Assignee:
    email: str
    name: str = ""
    completed: bool = False

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Assignee":
        return cls(email=doc.get("email") or "", name=doc.get("name") or "", completed=bool(doc.get("completed")))

    def to_dict(self) -> dict:
        return {"name": self.name, "email": self.email, "completed": self.completed}


@dataclass(frozen=True)
class Task:
    task_id: str
    title: str
    description: str = ""
    priority: TaskPriority = TaskPriority.LOW
    due_date: Optional[datetime] = None
    assigned: tuple[Assignee, ...] = ()
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Task":
        return cls(
            task_id=str(doc["_id"]),
            title=doc.get("title") or "",
            description=doc.get("description") or "",
            priority=stored_priority(doc.get("priority")),
            due_date=doc.get("dueDate"),
            assigned=tuple(Assignee.from_document(a) for a in doc.get("assigned") or []),
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )

    def to_document(self) -> dict:
        return {
            "_id": self.task_id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "dueDate": self.due_date,
            "assigned": [a.to_dict() for a in self.assigned],
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def to_dict(self) -> dict:
        out = self.to_document()
        out["dueDate"] = isoformat(self.due_date)
        out["createdAt"] = isoformat(self.created_at)
        out["updatedAt"] = isoformat(self.updated_at)
        return out

    @property
    def completed(self) -> bool:
        return bool(self.assigned) and all(a.completed for a in self.assigned)


def stored_priority(value: Any) -> TaskPriority:
    # Rows written before priorities were validated may hold anything.
    try:
        return TaskPriority(value)
    except ValueError:
        return TaskPriority.LOW
