from __future__ import annotations

import logging
from html import escape
from typing import Any, Optional
from urllib.parse import urlencode

from ..common.validators import require_email, require_non_empty
from ..core.constants import MAIL_BRAND
from ..core.exceptions import NotFoundError, ValidationError
from ..tasks.repository import TaskRepository
from ..tenants.service import TenantService
from .mailer import Mailer
from .model import Feedback
from .repository import FeedbackRepository

logger = logging.getLogger(__name__)

TASK_NOTICE_TEMPLATE = """\
<p>Hello,</p>
<p>Your task from <strong>{admin}</strong> is assigned. Please complete it.</p>
<p><a href="{url}">Click here to view your task</a></p>
<p>Provider {brand}</p>
"""


class NotificationService:
    """Use case: transactional e-mail to employees and to the business inbox."""

    def __init__(
        self,
        mailer: Mailer,
        tasks: TaskRepository,
        feedback: FeedbackRepository,
        tenants: TenantService,
        *,
        public_base_url: str,
        business_mail: Optional[str],
    ):
        self._mailer = mailer
        self._tasks = tasks
        self._feedback = feedback
        self._tenants = tenants
        self._public_base_url = public_base_url.rstrip("/")
        self._business_mail = business_mail

    def send_message(self, email: Any, message: Any) -> None:
        if not email or not message:
            raise ValidationError("Email and message are required")
        email = require_email(email, "Invalid email format.")
        message = require_non_empty(message, "Email and message are required")
        self._mailer.send(email, f"Message from Admin {MAIL_BRAND}", text=message, sender_name="Admin")

    def task_link(self, admin_email: str, task_id: str) -> str:
        return f"{self._public_base_url}/tasks/yourtask?" + urlencode({"id": task_id, "admin": admin_email})

    def notify_task(self, admin_email: str, employee_email: Any, task_id: Any) -> str:
        """Mail the assignee a link to the public task page; returns the link."""
        if not employee_email or not task_id:
            raise ValidationError("email and task_id are required")
        employee_email = require_email(employee_email, "Invalid email format.")
        task_id = require_non_empty(task_id, "email and task_id are required")

        self._tenants.require(admin_email)
        if not self._tasks.get(admin_email, task_id):
            raise NotFoundError("Task not found")

        url = self.task_link(admin_email, task_id)
        html = TASK_NOTICE_TEMPLATE.format(admin=escape(admin_email), url=escape(url), brand=MAIL_BRAND)
        self._mailer.send(
            employee_email,
            f"Task Notification from {admin_email}",
            html=html,
            sender_name=admin_email,
        )
        logger.info("tenant %s notified %s about task %s", admin_email, employee_email, task_id)
        return url

    def send_feedback(self, message: Any) -> Feedback:
        message = require_non_empty(message, "Message is required")
        if not self._business_mail:
            feedback = self._feedback.add(message)
            logger.warning("BUSINESS_MAIL is not set; feedback %s stored only", feedback.feedback_id)
            return feedback
        # Stored only after delivery.
        self._mailer.send(
            self._business_mail,
            f"Message from Feedback {MAIL_BRAND}",
            text=message,
            sender_name="Feedback",
        )
        return self._feedback.add(message)
