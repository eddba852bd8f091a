from __future__ import annotations

from enum import Enum


class StoreBackend(str, Enum):
    """Persistence backend selected by STORE_BACKEND."""

    MONGO = "mongo"
    MYSQL = "mysql"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TenantRole(str, Enum):
    ADMIN = "admin"
