"""Create the wage tracker database and tables from database/schema.sql.

Usage: APP_ENV=production python scripts/init_db.py
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.wage_tracker.wage_tracker.database.bootstrap import apply_schema, list_tables
from src.wage_tracker.wage_tracker.database.connection import DBConfig
from src.wage_tracker.wage_tracker.main import SCHEMA_PATH


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=SCHEMA_PATH)
    tables = sorted(list_tables(db_config))

    print(f"OK: {DBConfig.from_dict(db_config)} ready with {len(tables)} tables: {', '.join(tables)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
