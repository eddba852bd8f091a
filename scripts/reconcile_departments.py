"""Report or repair drift between the flat and nested employee lists.

    python scripts/reconcile_departments.py            # report only
    python scripts/reconcile_departments.py --apply    # rebuild nested lists

Only meaningful for the document store; the relational schema computes
membership from the foreign key.
"""
from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from dotenv import load_dotenv

from onemanage.config import get_settings_module
from onemanage.core.constants import USERS_COLLECTION
from onemanage.core.enums import StoreBackend
from onemanage.database.connection import MongoConfig, MongoConnection
from onemanage.database.mongo_base import replace_fields
from onemanage.employees.synchronizer import EmployeeSynchronizer

logger = logging.getLogger("reconcile_departments")


def reconcile_all(users, synchronizer: EmployeeSynchronizer, *, apply: bool) -> dict[str, int]:
    """Per tenant email, how many (department, email) pairs were out of step."""
    report: dict[str, int] = {}
    for doc in users.find({}, {"email": 1, "employees": 1, "departments": 1}):
        pairs = synchronizer.drift(doc)
        if not pairs:
            continue
        report[doc["email"]] = len(pairs)
        for department_id, email in pairs:
            logger.info("%s: department=%s employee=%s out of step", doc["email"], department_id, email)
        if apply:
            synchronizer.reconcile(doc)
            replace_fields(users, doc["email"], departments=doc["departments"])
    return report


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--apply", action="store_true", help="rewrite the nested lists")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    if StoreBackend(str(settings.STORE_BACKEND).lower()) is not StoreBackend.MONGO:
        print("Nothing to do: STORE_BACKEND is not mongo")
        return 0

    mongo_config = dict(settings.MONGO_CONFIG)
    conn = MongoConnection.get_instance(MongoConfig(uri=mongo_config["uri"], database=mongo_config["database"]))
    try:
        report = reconcile_all(conn.collection(USERS_COLLECTION), EmployeeSynchronizer(), apply=args.apply)
    finally:
        conn.close()

    action = "repaired" if args.apply else "found"
    print(f"OK: {action} drift in {len(report)} tenant(s), {sum(report.values())} pair(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
