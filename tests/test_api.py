from __future__ import annotations

import pytest

ADMIN = "admin@acme.io"


@pytest.fixture
def registered(client):
    resp = client.post("/api/v1/init-user", json={"name": "Acme Admin", "email": ADMIN})
    assert resp.status_code == 201


def _department(client, auth_headers, name="Engineering"):
    resp = client.post("/api/v1/departments", json={"name": name}, headers=auth_headers)
    assert resp.status_code == 201
    return resp.get_json()["data"]["_id"]


def test_init_user_is_idempotent(client):
    first = client.post("/api/v1/init-user", json={"name": "Acme Admin", "email": ADMIN})
    second = client.post("/api/v1/init-user", json={"name": "Acme Admin", "email": ADMIN})

    assert first.status_code == 201
    assert first.get_json()["message"] == "User added successfully."
    assert second.status_code == 200
    assert second.get_json()["message"] == "User already exists."
    assert second.get_json()["data"]["email"] == ADMIN


def test_init_user_rejects_bad_email(client):
    resp = client.post("/api/v1/init-user", json={"name": "Acme", "email": "nope"})

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "Invalid email format."}


@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/api/v1/employees"),
        ("post", "/api/v1/employees"),
        ("get", "/api/v1/departments"),
        ("delete", "/api/v1/departments?id=x"),
        ("get", "/api/v1/tasks"),
        ("get", "/api/v1/dashboard"),
        ("post", "/api/v1/send-mail"),
    ],
)
def test_protected_routes_need_identity(client, mongo, method, path):
    resp = getattr(client, method)(path, json={})

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Unauthorized"}
    assert mongo.collection("users").docs == []


def test_session_cookie_is_not_an_identity(client, registered):
    with client.session_transaction() as sess:
        sess["email"] = ADMIN

    resp = client.get("/api/v1/employees")

    assert resp.status_code == 401


def test_unknown_tenant_is_not_found(client):
    resp = client.get("/api/v1/employees", headers={"X-Auth-Request-Email": "ghost@acme.io"})

    assert resp.status_code == 404
    assert resp.get_json()["message"] == "User not found"


def test_employee_lifecycle(client, registered, auth_headers):
    department_id = _department(client, auth_headers)
    employee = {"email": "ann@acme.io", "name": "Ann", "department": department_id, "salary": 4200}

    added = client.post("/api/v1/employees", json={"employee": employee}, headers=auth_headers)
    assert added.status_code == 200
    assert added.get_json()["message"] == "Employee added successfully"

    duplicate = client.post("/api/v1/employees", json={"employee": employee}, headers=auth_headers)
    assert duplicate.status_code == 409

    members = client.get(f"/api/v1/departments/{department_id}/employees", headers=auth_headers).get_json()
    assert members["count"] == 1
    assert members["data"][0]["email"] == "ann@acme.io"

    updated = client.put(
        "/api/v1/employees", json={"employee": {"email": "ann@acme.io", "position": "Lead"}}, headers=auth_headers
    )
    assert updated.get_json()["data"]["position"] == "Lead"

    deleted = client.delete("/api/v1/employees?employeeEmail=ann@acme.io", headers=auth_headers)
    assert deleted.get_json() == {"success": True, "message": "Employee deleted successfully"}
    assert client.get("/api/v1/employees", headers=auth_headers).get_json()["data"] == []


def test_update_of_unknown_employee_still_succeeds(client, registered, auth_headers):
    resp = client.put(
        "/api/v1/employees", json={"employee": {"email": "ghost@acme.io", "name": "G"}}, headers=auth_headers
    )

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"email": "ghost@acme.io", "name": "G"}


def test_add_employee_without_department_is_rejected(client, registered, auth_headers):
    resp = client.post("/api/v1/employees", json={"employee": {"email": "ann@acme.io"}}, headers=auth_headers)

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Employee email and department required"


def test_non_json_body_is_rejected(client, registered, auth_headers):
    resp = client.post("/api/v1/departments", data="name=Eng", headers=auth_headers)

    assert resp.status_code == 400


def test_department_routes(client, registered, auth_headers):
    department_id = _department(client, auth_headers)

    listed = client.get("/api/v1/departments", headers=auth_headers).get_json()
    assert listed["count"] == 1

    by_id = client.get(f"/api/v1/departments/name?id={department_id}", headers=auth_headers).get_json()
    assert by_id["data"][0]["name"] == "Engineering"

    updated = client.put(
        "/api/v1/departments",
        json={"departmentId": department_id, "name": "Platform", "employeeEmails": []},
        headers=auth_headers,
    )
    assert updated.get_json()["data"]["name"] == "Platform"

    missing = client.put(
        "/api/v1/departments",
        json={"departmentId": "missing", "name": "X", "employeeEmails": []},
        headers=auth_headers,
    )
    assert missing.status_code == 404

    deleted = client.delete(f"/api/v1/departments?id={department_id}", headers=auth_headers)
    assert deleted.get_json()["message"] == "Department deleted"


def test_task_routes_and_public_completion(client, registered, auth_headers, mailer):
    department_id = _department(client, auth_headers)
    client.post(
        "/api/v1/employees",
        json={"employee": {"email": "ann@acme.io", "name": "Ann", "department": department_id}},
        headers=auth_headers,
    )

    created = client.post(
        "/api/v1/tasks",
        json={"title": "Report", "dueDate": "2026-03-01", "priority": "Medium", "assigned": [{"email": "ann@acme.io"}]},
        headers=auth_headers,
    )
    assert created.status_code == 201
    task_id = created.get_json()["data"]["_id"]
    assert created.get_json()["data"]["dueDate"] == "2026-03-01T00:00:00"

    notified = client.post("/api/v1/tasks/notify", json={"task_id": task_id, "email": "ann@acme.io"}, headers=auth_headers)
    assert notified.status_code == 200
    assert len(mailer.sent) == 1

    public = client.get(f"/api/v1/tasks/update?admin={ADMIN}&task_id={task_id}")
    assert public.status_code == 200
    assert public.get_json()["data"]["assigned"][0]["completed"] is False

    done = client.put("/api/v1/tasks/update", json={"admin": ADMIN, "task_id": task_id, "completed": True})
    assert done.status_code == 200
    task = client.get(f"/api/v1/tasks?id={task_id}", headers=auth_headers).get_json()["data"]
    assert task["assigned"][0]["completed"] is True

    bad = client.put("/api/v1/tasks/update", json={"admin": ADMIN, "task_id": task_id})
    assert bad.status_code == 400

    assert client.get("/api/v1/tasks?id=missing", headers=auth_headers).status_code == 404
    assert client.delete(f"/api/v1/tasks?id={task_id}", headers=auth_headers).status_code == 200


def test_feedback_is_public(client, mailer):
    resp = client.post("/api/v1/feedback", json={"message": "Nice work"})

    assert resp.status_code == 200
    assert mailer.sent[0]["recipient"] == "feedback@example.com"


def test_dashboard(client, registered, auth_headers):
    _department(client, auth_headers)

    data = client.get("/api/v1/dashboard", headers=auth_headers).get_json()["data"]

    assert data["departments"] == 1
    assert data["tasks"] == 0


def test_unexpected_errors_become_internal_error(client, registered, auth_headers, container, monkeypatch):
    def boom(tenant_email):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(container.dashboard_service, "summary", boom)

    resp = client.get("/api/v1/dashboard", headers=auth_headers)

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "Internal Server Error"}
