from __future__ import annotations

from typing import Protocol

from .model import Feedback


class FeedbackRepository(Protocol):
    def add(self, message: str) -> Feedback:
        raise NotImplementedError
