from __future__ import annotations

from flask import Flask, request

from ..auth.identity import current_tenant_email, make_tenant_required
from ..common.http import json_body, json_endpoint, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    tenant_required = make_tenant_required(container.identity)
    service = container.employee_service

    @app.route("/api/v1/employees", methods=["GET"], endpoint="list_employees")
    @json_endpoint
    @tenant_required
    def list_employees():
        employees = service.list(current_tenant_email())
        return ok([e.to_dict() for e in employees])

    @app.route("/api/v1/employees", methods=["POST"], endpoint="add_employee")
    @json_endpoint
    @tenant_required
    def add_employee():
        payload = json_body().get("employee") or {}
        employee = service.add(current_tenant_email(), payload)
        return ok(employee.to_dict(), message="Employee added successfully")

    @app.route("/api/v1/employees", methods=["PUT"], endpoint="update_employee")
    @json_endpoint
    @tenant_required
    def update_employee():
        payload = json_body().get("employee") or {}
        employee = service.update(current_tenant_email(), payload)
        data = employee.to_dict() if employee else payload
        return ok(data, message="Employee updated successfully")

    @app.route("/api/v1/employees", methods=["DELETE"], endpoint="delete_employee")
    @json_endpoint
    @tenant_required
    def delete_employee():
        email = request.args.get("employeeEmail") or request.args.get("email")
        service.remove(current_tenant_email(), email)
        return ok(message="Employee deleted successfully")

    @app.route("/api/v1/departments/<department_id>/employees", methods=["GET"], endpoint="department_members")
    @json_endpoint
    @tenant_required
    def department_members(department_id: str):
        members = service.members(current_tenant_email(), department_id)
        return ok([e.to_dict() for e in members], count=len(members))
