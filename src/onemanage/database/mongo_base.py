"""Helpers for the one-document-per-tenant layout.

A tenant document looks like::

    {"_id": ObjectId, "name", "email", "avatar", "role",
     "departments": [...], "employees": [...], "tasks": [...],
     "createdAt", "updatedAt"}

Writes only ever replace whole top-level fields (``$set``) or append one
element (``$push``); there is no cross-field transaction.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from pymongo import ASCENDING

from ..common.datetime_utils import now_utc
from ..core.constants import USERS_COLLECTION
from ..core.exceptions import NotFoundError
from .connection import MongoConnection

logger = logging.getLogger(__name__)


def tenant_filter(tenant_email: str) -> dict:
    return {"email": tenant_email}


def load_tenant(collection, tenant_email: str, *fields: str) -> dict:
    projection: Optional[dict] = None
    if fields:
        projection = {field: 1 for field in fields}
        projection["_id"] = 0
    doc = collection.find_one(tenant_filter(tenant_email), projection)
    if not doc:
        raise NotFoundError("User not found")
    return doc


def replace_fields(collection, tenant_email: str, **fields: Any) -> None:
    fields["updatedAt"] = now_utc()
    collection.update_one(tenant_filter(tenant_email), {"$set": fields})


def push_item(collection, tenant_email: str, field: str, item: dict) -> None:
    collection.update_one(
        tenant_filter(tenant_email),
        {"$push": {field: item}, "$set": {"updatedAt": now_utc()}},
    )


def ensure_indexes(conn_factory: MongoConnection) -> None:
    users = conn_factory.collection(USERS_COLLECTION)
    users.create_index([("email", ASCENDING)], unique=True)
    logger.info("mongo indexes ready on %s", USERS_COLLECTION)
