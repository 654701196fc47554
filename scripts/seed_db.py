from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.qr_attendance.qr_attendance.database.bootstrap import ensure_demo_users
from src.qr_attendance.qr_attendance.database.connection import DatabaseConnection, DBConfig
from src.qr_attendance.qr_attendance.users.mysql_user_repository import MySQLUserRepository


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    users = MySQLUserRepository(DatabaseConnection(DBConfig.from_dict(db_config)))
    created = ensure_demo_users(users)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(new users: {', '.join(created) or 'none'})"
    )


if __name__ == "__main__":
    main()
