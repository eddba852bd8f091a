from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat


@dataclass(frozen=True)
class Feedback:
    feedback_id: str
    message: str
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {"_id": self.feedback_id, "message": self.message, "createdAt": isoformat(self.created_at)}
