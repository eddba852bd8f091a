from __future__ import annotations

from datetime import datetime

import pytest

from onemanage.core.enums import TaskPriority
from onemanage.core.exceptions import NotFoundError, ValidationError

ADMIN = "admin@acme.io"


@pytest.fixture
def staff(container, tenant):
    department = container.department_service.create(ADMIN, {"name": "Engineering"})
    for email, name in (("ann@acme.io", "Ann"), ("bob@acme.io", "Bob")):
        container.employee_service.add(ADMIN, {"email": email, "name": name, "department": department.department_id})
    return department


def _create(container, **overrides):
    payload = {
        "title": "Quarterly report",
        "dueDate": "2026-03-01T17:00:00Z",
        "assigned": [{"email": "ann@acme.io"}],
    }
    payload.update(overrides)
    return container.task_service.create(ADMIN, payload)


def test_create_fills_defaults_and_assignee_names(container, staff):
    task = _create(container, description="Numbers for Q1")

    assert task.priority is TaskPriority.LOW
    assert task.due_date == datetime(2026, 3, 1, 17, 0)
    assert [(a.email, a.name, a.completed) for a in task.assigned] == [("ann@acme.io", "Ann", False)]
    assert container.task_service.get(ADMIN, task.task_id) == task


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": " "},
        {"dueDate": None},
        {"dueDate": "next friday"},
        {"priority": "Urgent"},
        {"assigned": [{"name": "No email"}]},
        {"assigned": "ann@acme.io"},
    ],
)
def test_create_validation(container, staff, overrides):
    with pytest.raises(ValidationError):
        _create(container, **overrides)


def test_create_with_unknown_assignee(container, staff):
    with pytest.raises(NotFoundError):
        _create(container, assigned=[{"email": "ghost@acme.io"}])


def test_update_is_partial(container, staff):
    task = _create(container, description="Numbers for Q1")

    updated = container.task_service.update(
        ADMIN,
        {"taskId": task.task_id, "priority": "high", "assigned": ["ann@acme.io", "bob@acme.io"]},
    )

    assert updated.priority is TaskPriority.HIGH
    assert updated.title == "Quarterly report"
    assert updated.description == "Numbers for Q1"
    assert [a.email for a in updated.assigned] == ["ann@acme.io", "bob@acme.io"]


def test_update_assigned_keeps_completion(container, staff):
    task = _create(container)
    container.task_service.set_completion(ADMIN, task.task_id, True)

    updated = container.task_service.update(
        ADMIN,
        {"taskId": task.task_id, "assigned": ["ann@acme.io", "bob@acme.io"]},
    )

    assert [(a.email, a.completed) for a in updated.assigned] == [("ann@acme.io", True), ("bob@acme.io", False)]
    assert container.task_service.get(ADMIN, task.task_id).assigned == updated.assigned


def test_update_assigned_takes_explicit_completion(container, staff):
    task = _create(container)

    updated = container.task_service.update(
        ADMIN,
        {"taskId": task.task_id, "assigned": [{"email": "ann@acme.io", "completed": True}]},
    )

    assert [(a.email, a.completed) for a in updated.assigned] == [("ann@acme.io", True)]
    with pytest.raises(ValidationError):
        container.task_service.update(
            ADMIN,
            {"taskId": task.task_id, "assigned": [{"email": "ann@acme.io", "completed": "yes"}]},
        )


def test_update_assigned_on_missing_task(container, staff):
    with pytest.raises(NotFoundError, match="Task not found"):
        container.task_service.update(ADMIN, {"taskId": "missing", "assigned": ["ann@acme.io"]})


def test_update_errors(container, staff):
    task = _create(container)

    with pytest.raises(ValidationError):
        container.task_service.update(ADMIN, {"title": "no id"})
    with pytest.raises(ValidationError):
        container.task_service.update(ADMIN, {"taskId": task.task_id, "dueDate": "soon"})
    with pytest.raises(NotFoundError):
        container.task_service.update(ADMIN, {"taskId": "missing", "title": "X"})


def test_delete(container, staff):
    task = _create(container)

    assert container.task_service.delete(ADMIN, task.task_id) is True
    assert container.task_service.delete(ADMIN, task.task_id) is False
    with pytest.raises(NotFoundError):
        container.task_service.get(ADMIN, task.task_id)


def test_public_completion_marks_every_assignee(container, staff):
    task = _create(container, assigned=[{"email": "ann@acme.io"}, {"email": "bob@acme.io"}])

    container.task_service.set_completion(ADMIN, task.task_id, True)

    public = container.task_service.get_public(ADMIN, task.task_id)
    assert public.completed is True
    assert all(a.completed for a in public.assigned)


@pytest.mark.parametrize("completed", [None, "yes", 1])
def test_public_completion_requires_bool(container, staff, completed):
    task = _create(container)

    with pytest.raises(ValidationError):
        container.task_service.set_completion(ADMIN, task.task_id, completed)


def test_public_endpoints_unknown_admin_or_task(container, staff):
    task = _create(container)

    with pytest.raises(NotFoundError, match="Admin not found"):
        container.task_service.get_public("ghost@acme.io", task.task_id)
    with pytest.raises(NotFoundError, match="Task not found"):
        container.task_service.get_public(ADMIN, "missing")
    with pytest.raises(NotFoundError):
        container.task_service.set_completion("ghost@acme.io", task.task_id, True)
    with pytest.raises(NotFoundError):
        container.task_service.set_completion(ADMIN, "missing", True)
