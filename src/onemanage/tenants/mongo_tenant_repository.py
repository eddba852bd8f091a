from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import now_utc
from ..core.constants import USERS_COLLECTION
from ..core.enums import TenantRole
from ..database.connection import MongoConnection
from ..database.mongo_base import tenant_filter
from .model import Tenant
from .repository import TenantRepository

_PROFILE_FIELDS = {"name": 1, "email": 1, "avatar": 1, "role": 1, "createdAt": 1, "updatedAt": 1}


def document_to_tenant(doc: dict) -> Tenant:
    return Tenant(
        tenant_id=str(doc.get("_id")),
        name=doc.get("name") or "",
        email=doc["email"],
        avatar=doc.get("avatar"),
        role=TenantRole(doc.get("role") or TenantRole.ADMIN.value),
        created_at=doc.get("createdAt"),
        updated_at=doc.get("updatedAt"),
    )


class MongoTenantRepository(TenantRepository):
    def __init__(self, conn_factory: MongoConnection):
        self._conn_factory = conn_factory

    def _users(self):
        return self._conn_factory.collection(USERS_COLLECTION)

    def get_by_email(self, email: str) -> Optional[Tenant]:
        doc = self._users().find_one(tenant_filter(email), _PROFILE_FIELDS)
        return document_to_tenant(doc) if doc else None

    def create(self, *, name: str, email: str, avatar: Optional[str]) -> Tenant:
        now = now_utc()
        doc = {
            "name": name,
            "email": email,
            "avatar": avatar,
            "role": TenantRole.ADMIN.value,
            "departments": [],
            "employees": [],
            "tasks": [],
            "createdAt": now,
            "updatedAt": now,
        }
        result = self._users().insert_one(doc)
        doc["_id"] = result.inserted_id
        return document_to_tenant(doc)
