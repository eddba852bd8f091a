"""Dual-write maintenance of employee records inside a tenant document.

In the document store every employee lives twice in the same tenant
document: once in the flat ``employees`` list and once in the ``employees``
list nested under the department it references. Nothing in the store ties
the two together, so every mutation goes through :class:`EmployeeSynchronizer`,
which applies it to both representations.

Invariant: for every flat record whose ``department`` equals a department's
``_id``, that department's nested list holds a record with the same field
values (its own ``addedAt``/``updatedAt``), and nothing else is nested. An
employee without a department reference appears in no nested list.

Known asymmetry kept on purpose: adding an employee whose department does
not exist writes the flat record only and still succeeds.

All methods work on plain dicts and never touch the database; the caller
persists ``doc["employees"]`` and ``doc["departments"]`` afterwards.
"""
from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, Mapping, MutableMapping, Optional

from ..common.datetime_utils import now_utc
from ..core.exceptions import NotFoundError, ValidationError
from .model import EMPLOYEE_FIELDS, require_employee_email

Document = MutableMapping[str, object]


class EmployeeSynchronizer:
    def __init__(
        self,
        *,
        relocate_on_department_change: bool = True,
        clock: Callable[[], datetime] = now_utc,
    ):
        # False reproduces the legacy behavior: an update that changes
        # ``department`` leaves the nested copy where it was.
        self._relocate = relocate_on_department_change
        self._clock = clock

    # -- mutations -----------------------------------------------------

    def add(self, doc: Document, employee: Mapping[str, object]) -> bool:
        """Append ``employee`` to the flat list and to its department.

        Returns True when the nested copy was written, False when the
        referenced department does not exist.
        """
        if not employee.get("email") or not employee.get("department"):
            raise ValidationError("Employee email and department required")

        now = self._clock()
        doc["employees"] = _employees(doc) + [_stamped(employee, now)]

        department = self._find_department(doc, employee["department"])
        if department is None:
            return False
        department["employees"] = _employees(department) + [_stamped(employee, now)]
        return True

    def update(self, doc: Document, changes: Mapping[str, object]) -> int:
        """Merge ``changes`` into every record sharing ``changes["email"]``.

        Both passes scan everything. Returns how many flat records matched.
        """
        email = require_employee_email(changes)
        now = self._clock()

        matched = 0
        flat = []
        for record in _employees(doc):
            if record.get("email") == email:
                record = {**record, **changes, "updatedAt": now}
                matched += 1
            flat.append(record)
        doc["employees"] = flat

        doc["departments"] = [
            {
                **department,
                "employees": [
                    {**record, **changes, "updatedAt": now} if record.get("email") == email else record
                    for record in _employees(department)
                ],
            }
            for department in _departments(doc)
        ]

        if self._relocate and matched and "department" in changes:
            self._move_nested_copy(doc, email, str(changes.get("department") or ""), now)
        return matched

    def remove(self, doc: Document, email: str) -> int:
        """Drop ``email`` from the flat list and every nested list. Idempotent."""
        flat = _employees(doc)
        kept = [record for record in flat if record.get("email") != email]
        doc["employees"] = kept
        doc["departments"] = [
            {**department, "employees": [r for r in _employees(department) if r.get("email") != email]}
            for department in _departments(doc)
        ]
        return len(flat) - len(kept)

    def assign(self, doc: Document, department_id: str, emails: Iterable[str]) -> list[dict]:
        """Make ``emails`` the exact membership of ``department_id``.

        Selected employees point at the department and leave any other
        nested list; former members that were not selected lose their
        reference. Unknown emails are ignored.
        """
        if self._find_department(doc, department_id) is None:
            raise NotFoundError("Department not found")

        selected = set(emails)
        now = self._clock()

        flat = []
        for record in _employees(doc):
            if record.get("email") in selected:
                record = {**record, "department": department_id, "updatedAt": now}
            elif record.get("department") == department_id:
                record = {**record, "department": "", "updatedAt": now}
            flat.append(record)
        doc["employees"] = flat

        members = [_stamped(record, now) for record in flat if record.get("email") in selected]
        departments = []
        for department in _departments(doc):
            if department.get("_id") == department_id:
                department = {**department, "employees": members}
            else:
                department = {
                    **department,
                    "employees": [r for r in _employees(department) if r.get("email") not in selected],
                }
            departments.append(department)
        doc["departments"] = departments
        return members

    def remove_department(self, doc: Document, department_id: str) -> bool:
        """Delete a department and clear the references pointing at it."""
        departments = _departments(doc)
        kept = [d for d in departments if d.get("_id") != department_id]
        if len(kept) == len(departments):
            return False

        now = self._clock()
        doc["employees"] = [
            {**record, "department": "", "updatedAt": now} if record.get("department") == department_id else record
            for record in _employees(doc)
        ]
        doc["departments"] = kept
        return True

    # -- read path -----------------------------------------------------

    def members(self, doc: Document, department_id: str) -> Optional[list[dict]]:
        """Nested list of ``department_id``; None when the department is unknown."""
        department = self._find_department(doc, department_id)
        if department is None:
            return None
        return list(_employees(department))

    # -- consistency checks --------------------------------------------

    def drift(self, doc: Document) -> list[tuple[str, str]]:
        """``(department_id, email)`` pairs where the two lists disagree."""
        department_ids = {d.get("_id") for d in _departments(doc)}
        expected = {
            (record.get("department"), record.get("email")): record
            for record in _employees(doc)
            if record.get("department") in department_ids
        }
        actual = {
            (department.get("_id"), record.get("email")): record
            for department in _departments(doc)
            for record in _employees(department)
        }

        broken = set(expected) ^ set(actual)
        for key in set(expected) & set(actual):
            if _fields(expected[key]) != _fields(actual[key]):
                broken.add(key)
        return sorted(broken, key=lambda pair: (str(pair[0]), str(pair[1])))

    def reconcile(self, doc: Document) -> int:
        """Rebuild every nested list from the flat list.

        Existing nested copies keep their ``addedAt``. Returns the number of
        pairs that were out of step before the rebuild.
        """
        broken = len(self.drift(doc))
        now = self._clock()

        departments = []
        for department in _departments(doc):
            department_id = department.get("_id")
            previous = {r.get("email"): r for r in _employees(department)}
            members = []
            for record in _employees(doc):
                if record.get("department") != department_id:
                    continue
                copy = _stamped(record, now)
                earlier = previous.get(record.get("email"))
                if earlier and earlier.get("addedAt"):
                    copy["addedAt"] = earlier["addedAt"]
                members.append(copy)
            departments.append({**department, "employees": members})
        doc["departments"] = departments
        return broken

    # -- helpers -------------------------------------------------------

    def _find_department(self, doc: Document, department_id: object) -> Optional[dict]:
        for department in _departments(doc):
            if department.get("_id") == department_id:
                return department
        return None

    def _move_nested_copy(self, doc: Document, email: str, target_id: str, now: datetime) -> None:
        current = next(record for record in _employees(doc) if record.get("email") == email)
        departments = []
        for department in _departments(doc):
            members = _employees(department)
            if target_id and department.get("_id") == target_id:
                if not any(r.get("email") == email for r in members):
                    members = members + [_stamped(current, now)]
            else:
                members = [r for r in members if r.get("email") != email]
            departments.append({**department, "employees": members})
        doc["departments"] = departments


def _employees(container: Mapping[str, object]) -> list[dict]:
    return list(container.get("employees") or [])


def _departments(doc: Mapping[str, object]) -> list[dict]:
    return list(doc.get("departments") or [])


def _stamped(record: Mapping[str, object], now: datetime) -> dict:
    return {**record, "addedAt": now, "updatedAt": now}


def _fields(record: Mapping[str, object]) -> dict:
    return {key: record.get(key) for key in EMPLOYEE_FIELDS}
