from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import isoformat, parse_iso_date
from ..common.validators import optional_int, optional_text
from ..core.exceptions import ValidationError

# Wire/document key -> dataclass attribute. Only these keys are accepted from
# requests; addedAt/updatedAt are always stamped server-side.
EMPLOYEE_FIELDS = {
    "name": "name",
    "email": "email",
    "department": "department",
    "phone": "phone",
    "salary": "salary",
    "position": "position",
    "gender": "gender",
    "dateOfBirth": "date_of_birth",
    "profilePhoto": "profile_photo",
}


@dataclass(frozen=True)
class Employee:
    """One employee record of a tenant, keyed by ``email``."""

    email: str
    name: str = ""
    department: Optional[str] = None
    phone: Optional[str] = None
    salary: Optional[int] = None
    position: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None
    profile_photo: Optional[str] = None
    added_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    employee_id: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Employee":
        values = {attr: doc.get(key) for key, attr in EMPLOYEE_FIELDS.items()}
        values["name"] = values.get("name") or ""
        values["department"] = values.get("department") or None
        raw_id = doc.get("_id")
        return cls(
            **values,
            added_at=doc.get("addedAt"),
            updated_at=doc.get("updatedAt"),
            employee_id=str(raw_id) if raw_id is not None else None,
        )

    def to_dict(self) -> dict:
        out: dict[str, Any] = {}
        if self.employee_id:
            out["id"] = self.employee_id
        for key, attr in EMPLOYEE_FIELDS.items():
            out[key] = getattr(self, attr)
        out["department"] = self.department or ""
        out["addedAt"] = isoformat(self.added_at)
        out["updatedAt"] = isoformat(self.updated_at)
        return out


def normalize_employee_fields(payload: Mapping[str, Any]) -> dict:
    """Keep the known employee keys of a request payload, cleaned up.

    Keys absent from the payload stay absent so that an update merges only
    what the caller sent.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("Employee payload must be an object")

    fields: dict[str, Any] = {}
    for key in EMPLOYEE_FIELDS:
        if key not in payload:
            continue
        value = payload[key]
        if key == "salary":
            fields[key] = optional_int(value, "Salary")
        elif key == "dateOfBirth":
            text = optional_text(value)
            if text:
                try:
                    parse_iso_date(text)
                except ValueError:
                    raise ValidationError("Date of birth must be YYYY-MM-DD")
            fields[key] = text or None
        else:
            fields[key] = optional_text(value)
    if "department" in fields and not fields["department"]:
        fields["department"] = ""
    return fields


def require_employee_email(fields: Mapping[str, Any]) -> str:
    email = fields.get("email")
    if not email:
        raise ValidationError("Employee email required")
    return email
