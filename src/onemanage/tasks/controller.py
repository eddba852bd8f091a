from __future__ import annotations

from flask import Flask, request

from ..auth.identity import current_tenant_email, make_tenant_required
from ..common.http import json_body, json_endpoint, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    tenant_required = make_tenant_required(container.identity)
    service = container.task_service

    @app.route("/api/v1/tasks", methods=["GET"], endpoint="list_tasks")
    @json_endpoint
    @tenant_required
    def list_tasks():
        task_id = request.args.get("id")
        if task_id:
            return ok(service.get(current_tenant_email(), task_id).to_dict())
        tasks = service.list(current_tenant_email())
        return ok([t.to_dict() for t in tasks], count=len(tasks))

    @app.route("/api/v1/tasks", methods=["POST"], endpoint="create_task")
    @json_endpoint
    @tenant_required
    def create_task():
        task = service.create(current_tenant_email(), json_body())
        return ok(task.to_dict(), message="Task created", status=201)

    @app.route("/api/v1/tasks", methods=["PUT"], endpoint="update_task")
    @json_endpoint
    @tenant_required
    def update_task():
        task = service.update(current_tenant_email(), json_body())
        return ok(task.to_dict(), message="Task updated")

    @app.route("/api/v1/tasks", methods=["DELETE"], endpoint="delete_task")
    @json_endpoint
    @tenant_required
    def delete_task():
        service.delete(current_tenant_email(), request.args.get("id"))
        return ok(message="Task deleted")

    # Public: opened from the link in the task notification mail.
    @app.route("/api/v1/tasks/update", methods=["GET"], endpoint="public_task")
    @json_endpoint
    def public_task():
        task = service.get_public(request.args.get("admin"), request.args.get("task_id"))
        return ok(task.to_dict())

    @app.route("/api/v1/tasks/update", methods=["PUT"], endpoint="complete_task")
    @json_endpoint
    def complete_task():
        body = json_body()
        service.set_completion(body.get("admin"), body.get("task_id"), body.get("completed"))
        return ok(message="Task status updated")
