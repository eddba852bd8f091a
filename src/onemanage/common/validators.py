from __future__ import annotations

import re
from typing import Any, Optional

from ..core.constants import EMAIL_PATTERN
from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(EMAIL_PATTERN)


def require_non_empty(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return value.strip()


def require_email(value: Any, message: str = "Invalid email format.") -> str:
    value = require_non_empty(value, message)
    if not _EMAIL_RE.match(value):
        raise ValidationError(message)
    return value


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    return value.strip()


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} must be a number")


def require_bool(value: Any, message: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(message)
    return value


def require_list(value: Any, message: str) -> list:
    if not isinstance(value, list):
        raise ValidationError(message)
    return value
