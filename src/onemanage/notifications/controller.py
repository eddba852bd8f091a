from __future__ import annotations

from flask import Flask, request

from ..auth.identity import current_tenant_email, make_tenant_required
from ..common.http import json_body, json_endpoint, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    tenant_required = make_tenant_required(container.identity)
    service = container.notification_service

    @app.route("/api/v1/send-mail", methods=["POST"], endpoint="send_mail")
    @json_endpoint
    @tenant_required
    def send_mail():
        body = json_body()
        service.send_message(body.get("email"), body.get("message"))
        return ok(message="Mail sent successfully")

    @app.route("/api/v1/tasks/notify", methods=["GET", "POST"], endpoint="notify_task")
    @json_endpoint
    @tenant_required
    def notify_task():
        params = json_body() if request.method == "POST" else request.args
        link = service.notify_task(current_tenant_email(), params.get("email"), params.get("task_id"))
        return ok({"link": link}, message="Email sent successfully")

    @app.route("/api/v1/feedback", methods=["POST"], endpoint="send_feedback")
    @json_endpoint
    def send_feedback():
        feedback = service.send_feedback(json_body().get("message"))
        return ok(feedback.to_dict(), message="Feedback sent successfully")
