from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import isoformat
from ..core.constants import DEFAULT_DEPARTMENT_TYPE
from ..employees.model import Employee


@dataclass(frozen=True)
class Department:
    department_id: str
    name: str
    type: str = DEFAULT_DEPARTMENT_TYPE
    description: str = ""
    professional_details: str = ""
    employees: tuple[Employee, ...] = ()
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Department":
        return cls(
            department_id=str(doc["_id"]),
            name=doc.get("name") or "",
            type=doc.get("type") or DEFAULT_DEPARTMENT_TYPE,
            description=doc.get("description") or "",
            professional_details=doc.get("professionalDetails") or "",
            employees=tuple(Employee.from_document(e) for e in doc.get("employees") or []),
            created_at=doc.get("createdAt"),
        )

    def to_dict(self) -> dict:
        return {
            "_id": self.department_id,
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "professionalDetails": self.professional_details,
            "employees": [e.to_dict() for e in self.employees],
            "createdAt": isoformat(self.created_at),
        }
