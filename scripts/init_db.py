from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from dotenv import load_dotenv

from onemanage.config import get_settings_module
from onemanage.core.enums import StoreBackend
from onemanage.database.bootstrap import apply_schema, list_tables
from onemanage.database.connection import MongoConfig, MongoConnection
from onemanage.database.mongo_base import ensure_indexes


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    backend = StoreBackend(str(settings.STORE_BACKEND).lower())

    if backend is StoreBackend.MYSQL:
        db_config = dict(settings.DB_CONFIG)
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        tables = list_tables(db_config)
        print(
            "OK: Applied schema.sql -> "
            f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
            f"(tables={len(tables)})"
        )
        return

    mongo_config = dict(settings.MONGO_CONFIG)
    conn = MongoConnection.get_instance(MongoConfig(uri=mongo_config["uri"], database=mongo_config["database"]))
    try:
        ensure_indexes(conn)
    finally:
        conn.close()
    print(f"OK: Indexes ready -> {mongo_config['database']}")


if __name__ == "__main__":
    main()
