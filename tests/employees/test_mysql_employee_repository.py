from __future__ import annotations

import pytest

from onemanage.core.exceptions import NotFoundError
from onemanage.employees.mysql_employee_repository import MySQLEmployeeRepository

ADMIN = "admin@acme.io"
TENANT = [{"id": "u1"}]


def _row(email="ann@acme.io", name="Ann", department_id="d1"):
    return {
        "id": f"e-{name.lower()}",
        "department_id": department_id,
        "name": name,
        "email": email,
        "position": None,
        "phone": None,
        "salary": 4200,
        "gender": None,
        "date_of_birth": None,
        "profile_photo": None,
        "added_at": None,
        "updated_at": None,
    }


def test_members_of_unknown_department_is_none(mysql):
    mysql.script(TENANT, [])

    assert MySQLEmployeeRepository(mysql).list_for_department(ADMIN, "missing") is None
    assert len(mysql.executed) == 2


def test_members_are_filtered_by_department(mysql):
    mysql.script(TENANT, [{"id": "d1"}], [_row()])

    members = MySQLEmployeeRepository(mysql).list_for_department(ADMIN, "d1")

    assert [(e.email, e.department, e.salary) for e in members] == [("ann@acme.io", "d1", 4200)]
    sql, params = mysql.executed[-1]
    assert "e.department_id=%s" in sql
    assert params == ("u1", "d1")


def test_add_with_dangling_department_stores_null(mysql):
    mysql.script(TENANT, [], 1)

    employee = MySQLEmployeeRepository(mysql).add(ADMIN, {"email": "ann@acme.io", "name": "Ann", "department": "gone"})

    assert employee.department is None
    sql, params = mysql.executed[-1]
    assert sql.startswith("INSERT INTO employees")
    assert params[1:5] == ("u1", None, "Ann", "ann@acme.io")


def test_update_writes_known_columns_only(mysql):
    mysql.script(TENANT, [{"id": "d2"}], 1)

    changed = MySQLEmployeeRepository(mysql).update(
        ADMIN, {"email": "ann@acme.io", "name": "Ann B", "department": "d2", "nickname": "A"}
    )

    assert changed == 1
    sql, params = mysql.executed[-1]
    assert sql == "UPDATE employees SET name=%s, department_id=%s, updated_at=%s WHERE user_id=%s AND email=%s"
    assert params[:2] == ("Ann B", "d2")
    assert params[-2:] == ("u1", "ann@acme.io")


def test_remove_reports_rowcount(mysql):
    mysql.script(TENANT, 0)

    assert MySQLEmployeeRepository(mysql).remove(ADMIN, "ghost@acme.io") == 0


def test_unknown_tenant_is_not_found_and_rolled_back(mysql):
    mysql.script([])

    with pytest.raises(NotFoundError, match="User not found"):
        MySQLEmployeeRepository(mysql).add(ADMIN, {"email": "ann@acme.io", "department": "d1"})
    assert (mysql.commits, mysql.rollbacks) == (0, 1)
