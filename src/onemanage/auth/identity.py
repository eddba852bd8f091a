from __future__ import annotations

from functools import wraps
from typing import Optional, Protocol

from flask import g, request

from ..core.constants import DEFAULT_IDENTITY_HEADER
from ..core.exceptions import AuthenticationError


class IdentityProvider(Protocol):
    """Resolves the verified e-mail of the caller, if any."""

    def current_email(self) -> Optional[str]:
        raise NotImplementedError


class RequestIdentityProvider:
    """Reads the e-mail that the fronting identity proxy forwards in a header."""

    def __init__(self, header_name: str = DEFAULT_IDENTITY_HEADER):
        self._header_name = header_name

    def current_email(self) -> Optional[str]:
        value = request.headers.get(self._header_name)
        if not value or not str(value).strip():
            return None
        return str(value).strip()


def make_tenant_required(identity: IdentityProvider):
    def tenant_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            email = identity.current_email()
            if not email:
                raise AuthenticationError("Unauthorized")
            g.tenant_email = email
            return view(*args, **kwargs)

        return wrapper

    return tenant_required


def current_tenant_email() -> str:
    return g.tenant_email
