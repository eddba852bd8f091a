from __future__ import annotations

import copy
import os
import uuid
from datetime import datetime
from typing import Optional

import pytest

os.environ.setdefault("APP_ENV", "testing")

from onemanage.auth.identity import RequestIdentityProvider
from onemanage.container import assemble
from onemanage.departments.mongo_department_repository import MongoDepartmentRepository
from onemanage.employees.mongo_employee_repository import MongoEmployeeRepository
from onemanage.employees.synchronizer import EmployeeSynchronizer
from onemanage.main import create_app
from onemanage.notifications.mongo_feedback_repository import MongoFeedbackRepository
from onemanage.tasks.mongo_task_repository import MongoTaskRepository
from onemanage.tenants.mongo_tenant_repository import MongoTenantRepository

ADMIN = "admin@acme.io"


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 9, 0, 0)


class _InsertResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class FakeCollection:
    """Just enough of a pymongo collection for equality filters, ``$set`` and ``$push``."""

    def __init__(self):
        self.docs: list[dict] = []
        self.indexes: list = []

    @staticmethod
    def _matches(doc: dict, flt: Optional[dict]) -> bool:
        return all(doc.get(k) == v for k, v in (flt or {}).items())

    @staticmethod
    def _project(doc: dict, projection: Optional[dict]) -> dict:
        doc = copy.deepcopy(doc)
        if not projection:
            return doc
        keep = {k for k, v in projection.items() if v}
        out = {k: v for k, v in doc.items() if k in keep}
        if projection.get("_id", 1) and "_id" in doc:
            out["_id"] = doc["_id"]
        return out

    def find_one(self, flt=None, projection=None):
        for doc in self.docs:
            if self._matches(doc, flt):
                return self._project(doc, projection)
        return None

    def find(self, flt=None, projection=None):
        return [self._project(d, projection) for d in self.docs if self._matches(d, flt)]

    def insert_one(self, doc: dict):
        doc.setdefault("_id", uuid.uuid4().hex[:24])
        self.docs.append(copy.deepcopy(doc))
        return _InsertResult(doc["_id"])

    def update_one(self, flt: dict, update: dict):
        for doc in self.docs:
            if self._matches(doc, flt):
                for key, value in update.get("$set", {}).items():
                    doc[key] = copy.deepcopy(value)
                for key, value in update.get("$push", {}).items():
                    doc.setdefault(key, []).append(copy.deepcopy(value))
                return

    def create_index(self, keys, **kwargs):
        self.indexes.append((keys, kwargs))


class FakeMongo:
    def __init__(self):
        self.collections: dict[str, FakeCollection] = {}

    def collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


class FakeMailer:
    def __init__(self):
        self.sent: list[dict] = []

    def send(self, recipient, subject, *, text=None, html=None, sender_name=None):
        self.sent.append(
            {"recipient": recipient, "subject": subject, "text": text, "html": html, "sender_name": sender_name}
        )


class FakeCursor:
    def __init__(self, db: "FakeMySQL"):
        self._db = db
        self._rows: list[dict] = []
        self.rowcount = 0

    def execute(self, sql, params=()):
        self._db.executed.append((" ".join(sql.split()), tuple(params)))
        result = self._db.results.pop(0) if self._db.results else []
        if isinstance(result, int):
            self._rows, self.rowcount = [], result
        else:
            self._rows, self.rowcount = list(result), len(result)

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, db: "FakeMySQL"):
        self._db = db

    def cursor(self, dictionary=False):
        return FakeCursor(self._db)

    def commit(self):
        self._db.commits += 1

    def rollback(self):
        self._db.rollbacks += 1

    def close(self):
        pass


class FakeMySQL:
    """Stands in for ``DatabaseConnection``.

    Each ``execute`` consumes the next scripted result: a list of row dicts
    for a query, or an int taken as the ``rowcount`` of a write.
    """

    def __init__(self):
        self.results: list = []
        self.executed: list[tuple[str, tuple]] = []
        self.commits = 0
        self.rollbacks = 0

    def script(self, *results):
        self.results.extend(results)

    def connect(self):
        return FakeConnection(self)


@pytest.fixture
def mongo() -> FakeMongo:
    return FakeMongo()


@pytest.fixture
def mysql() -> FakeMySQL:
    return FakeMySQL()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def synchronizer(fixed_now) -> EmployeeSynchronizer:
    return EmployeeSynchronizer(clock=lambda: fixed_now)


@pytest.fixture
def container(mongo, mailer, synchronizer):
    return assemble(
        identity=RequestIdentityProvider("X-Auth-Request-Email"),
        mailer=mailer,
        synchronizer=synchronizer,
        tenants_repo=MongoTenantRepository(mongo),
        departments_repo=MongoDepartmentRepository(mongo, synchronizer),
        employees_repo=MongoEmployeeRepository(mongo, synchronizer),
        tasks_repo=MongoTaskRepository(mongo),
        feedback_repo=MongoFeedbackRepository(mongo),
        public_base_url="http://localhost:5000",
        business_mail="feedback@example.com",
    )


@pytest.fixture
def app(container):
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers() -> dict:
    return {"X-Auth-Request-Email": ADMIN}


@pytest.fixture
def tenant(container):
    tenant, _ = container.tenant_service.register(name="Acme Admin", email=ADMIN)
    return tenant
