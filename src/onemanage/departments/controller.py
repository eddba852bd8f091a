from __future__ import annotations

from flask import Flask, request

from ..auth.identity import current_tenant_email, make_tenant_required
from ..common.http import json_body, json_endpoint, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    tenant_required = make_tenant_required(container.identity)
    service = container.department_service

    @app.route("/api/v1/departments", methods=["GET"], endpoint="list_departments")
    @json_endpoint
    @tenant_required
    def list_departments():
        departments = service.list(current_tenant_email())
        return ok([d.to_dict() for d in departments], count=len(departments))

    @app.route("/api/v1/departments/name", methods=["GET"], endpoint="find_departments")
    @json_endpoint
    @tenant_required
    def find_departments():
        departments = service.list(current_tenant_email(), department_id=request.args.get("id"))
        return ok([d.to_dict() for d in departments], count=len(departments))

    @app.route("/api/v1/departments", methods=["POST"], endpoint="create_department")
    @json_endpoint
    @tenant_required
    def create_department():
        department = service.create(current_tenant_email(), json_body())
        return ok(department.to_dict(), message="Department created", status=201)

    @app.route("/api/v1/departments", methods=["PUT"], endpoint="update_department")
    @json_endpoint
    @tenant_required
    def update_department():
        department = service.update(current_tenant_email(), json_body())
        return ok(department.to_dict(), message="Department updated")

    @app.route("/api/v1/departments", methods=["DELETE"], endpoint="delete_department")
    @json_endpoint
    @tenant_required
    def delete_department():
        service.delete(current_tenant_email(), request.args.get("id"))
        return ok(message="Department deleted")
