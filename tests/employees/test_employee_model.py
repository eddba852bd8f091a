from __future__ import annotations

from datetime import datetime

import pytest

from onemanage.core.exceptions import ValidationError
from onemanage.employees.model import Employee, normalize_employee_fields


def test_normalize_keeps_known_keys_only():
    fields = normalize_employee_fields(
        {"email": " ann@acme.io ", "salary": "4200.0", "role": "boss", "department": None}
    )

    assert fields == {"email": "ann@acme.io", "salary": 4200, "department": ""}


def test_normalize_leaves_absent_keys_absent():
    assert normalize_employee_fields({"email": "ann@acme.io"}) == {"email": "ann@acme.io"}


@pytest.mark.parametrize("payload", [{"salary": "a lot"}, {"salary": True}, {"dateOfBirth": "02/01/1990"}])
def test_normalize_rejects_bad_values(payload):
    with pytest.raises(ValidationError):
        normalize_employee_fields(payload)


def test_to_dict_serializes_dates_and_blank_department():
    employee = Employee.from_document(
        {"email": "ann@acme.io", "name": "Ann", "addedAt": datetime(2026, 1, 5, 8, 30)}
    )

    data = employee.to_dict()

    assert data["department"] == ""
    assert data["addedAt"] == "2026-01-05T08:30:00"
    assert data["updatedAt"] is None
    assert "id" not in data
