from __future__ import annotations

import logging
from typing import Optional, Protocol

from flask_mail import Mail, Message

from ..core.exceptions import DeliveryError

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    def send(
        self,
        recipient: str,
        subject: str,
        *,
        text: Optional[str] = None,
        html: Optional[str] = None,
        sender_name: Optional[str] = None,
    ) -> None:
        raise NotImplementedError


class FlaskMailer:
    """SMTP delivery through Flask-Mail. One attempt per message, no retries."""

    def __init__(self, mail: Mail, default_sender: Optional[str]):
        self._mail = mail
        self._default_sender = default_sender

    def send(
        self,
        recipient: str,
        subject: str,
        *,
        text: Optional[str] = None,
        html: Optional[str] = None,
        sender_name: Optional[str] = None,
    ) -> None:
        sender = self._default_sender
        if sender and sender_name:
            sender = (sender_name, sender)
        msg = Message(subject=subject, recipients=[recipient], body=text, html=html, sender=sender)
        try:
            self._mail.send(msg)
        except Exception as e:
            logger.error("mail to %s (%s) failed: %s", recipient, subject, e)
            raise DeliveryError("Failed to send mail") from e
        logger.info("mail sent to %s (%s)", recipient, subject)
