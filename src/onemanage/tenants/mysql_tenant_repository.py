from __future__ import annotations

import uuid
from typing import Optional

from ..common.datetime_utils import now_utc
from ..core.enums import TenantRole
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Tenant
from .repository import TenantRepository


class MySQLTenantRepository(TenantRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Tenant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, email, avatar, role, created_at, updated_at FROM users WHERE email=%s",
                (email,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Tenant(
                tenant_id=row["id"],
                name=row["name"],
                email=row["email"],
                avatar=row.get("avatar"),
                role=TenantRole(row.get("role") or TenantRole.ADMIN.value),
                created_at=row.get("created_at"),
                updated_at=row.get("updated_at"),
            )

    def create(self, *, name: str, email: str, avatar: Optional[str]) -> Tenant:
        tenant_id = str(uuid.uuid4())
        now = now_utc()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(id, name, email, avatar, role, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (tenant_id, name, email, avatar, TenantRole.ADMIN.value, now, now),
            )
        return Tenant(tenant_id=tenant_id, name=name, email=email, avatar=avatar, created_at=now, updated_at=now)
