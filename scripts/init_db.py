from __future__ import annotations

import importlib
from pathlib import Path

from config import get_settings_module

from rfid_attendance.database.bootstrap import apply_schema
from rfid_attendance.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    config = DBConfig.from_dict(db_config, timeout_seconds=int(getattr(settings, "STORE_TIMEOUT_SECONDS", 5)))

    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    count = apply_schema(config, schema_path=schema_path)
    print(
        "OK: Applied schema.sql -> "
        f"{config.user}@{config.host}:{config.port}/{config.database} "
        f"(statements={count})"
    )


if __name__ == "__main__":
    main()
