from __future__ import annotations

import uuid

from ..common.datetime_utils import now_utc
from ..core.constants import FEEDBACK_COLLECTION
from ..database.connection import MongoConnection
from .model import Feedback
from .repository import FeedbackRepository


class MongoFeedbackRepository(FeedbackRepository):
    def __init__(self, conn_factory: MongoConnection):
        self._conn_factory = conn_factory

    def add(self, message: str) -> Feedback:
        feedback = Feedback(feedback_id=str(uuid.uuid4()), message=message, created_at=now_utc())
        self._conn_factory.collection(FEEDBACK_COLLECTION).insert_one(
            {"_id": feedback.feedback_id, "message": feedback.message, "createdAt": feedback.created_at}
        )
        return feedback
