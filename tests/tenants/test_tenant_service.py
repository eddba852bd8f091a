from __future__ import annotations

import pytest

from onemanage.core.exceptions import NotFoundError, ValidationError


def test_register_creates_tenant_with_empty_arrays(container, mongo):
    tenant, created = container.tenant_service.register(name="Acme", email="admin@acme.io", avatar="")

    assert created is True
    assert tenant.email == "admin@acme.io"
    assert tenant.avatar is None
    doc = mongo.collection("users").docs[0]
    assert doc["departments"] == [] and doc["employees"] == [] and doc["tasks"] == []
    assert doc["role"] == "admin"


def test_register_existing_tenant_is_not_duplicated(container, mongo):
    container.tenant_service.register(name="Acme", email="admin@acme.io")

    tenant, created = container.tenant_service.register(name="Other", email="admin@acme.io")

    assert created is False
    assert tenant.name == "Acme"
    assert len(mongo.collection("users").docs) == 1


@pytest.mark.parametrize(
    "name,email",
    [("", "admin@acme.io"), ("Acme", ""), ("Acme", "admin@acme"), ("Acme", "admin acme@io.com")],
)
def test_register_validation(container, name, email):
    with pytest.raises(ValidationError):
        container.tenant_service.register(name=name, email=email)


def test_require_unknown_tenant(container):
    with pytest.raises(NotFoundError):
        container.tenant_service.require("ghost@acme.io")
