from __future__ import annotations

import uuid

from ..common.datetime_utils import now_utc
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .model import Feedback
from .repository import FeedbackRepository


class MySQLFeedbackRepository(FeedbackRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, message: str) -> Feedback:
        feedback = Feedback(feedback_id=str(uuid.uuid4()), message=message, created_at=now_utc())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO feedback(id, message, created_at) VALUES(%s,%s,%s)",
                (feedback.feedback_id, feedback.message, feedback.created_at),
            )
        return feedback
