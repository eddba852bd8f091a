from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import optional_text, require_email
from ..core.exceptions import NotFoundError, ValidationError
from .model import Tenant
from .repository import TenantRepository

logger = logging.getLogger(__name__)


class TenantService:
    """Use case: register the admin account behind a signed-in identity."""

    def __init__(self, tenants: TenantRepository):
        self._tenants = tenants

    def register(self, *, name: str, email: str, avatar: Optional[str] = None) -> tuple[Tenant, bool]:
        """Returns ``(tenant, created)``; an existing tenant is returned as is."""
        name = optional_text(name)
        if not name or not optional_text(email):
            raise ValidationError("Name and Email are required.")
        email = require_email(email)

        existing = self._tenants.get_by_email(email)
        if existing:
            return existing, False

        tenant = self._tenants.create(name=name, email=email, avatar=optional_text(avatar) or None)
        logger.info("registered tenant %s", email)
        return tenant, True

    def require(self, email: str) -> Tenant:
        tenant = self._tenants.get_by_email(email)
        if not tenant:
            raise NotFoundError("User not found")
        return tenant
