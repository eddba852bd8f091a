from __future__ import annotations

from flask import Flask

from ..auth.identity import current_tenant_email, make_tenant_required
from ..common.http import json_endpoint, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    tenant_required = make_tenant_required(container.identity)

    @app.route("/api/v1/dashboard", methods=["GET"], endpoint="dashboard")
    @json_endpoint
    @tenant_required
    def dashboard():
        return ok(container.dashboard_service.summary(current_tenant_email()))
