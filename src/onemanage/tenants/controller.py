from __future__ import annotations

from flask import Flask

from ..common.http import json_body, json_endpoint, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/v1/init-user", methods=["POST"], endpoint="init_user")
    @json_endpoint
    def init_user():
        body = json_body()
        tenant, created = container.tenant_service.register(
            name=body.get("name"),
            email=body.get("email"),
            avatar=body.get("avatar"),
        )
        if created:
            return ok(tenant.to_dict(), message="User added successfully.", status=201)
        return ok(tenant.to_dict(), message="User already exists.")
