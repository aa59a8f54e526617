from __future__ import annotations

import sqlite3
import sys
from pathlib import Path

_REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(_REPO_ROOT / "src"))

from drive_search.settings import DATABASE_URL, sqlite_path_from_url


def main() -> None:
    db_path = sqlite_path_from_url(DATABASE_URL)
    conn = sqlite3.connect(db_path)
    try:
        print("DB:", db_path)
        print("Tables:")
        for row in conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
        ):
            print("-", row[0])

        print("\nUsers:")
        for row in conn.execute(
            "SELECT user_id, name, email FROM users ORDER BY created_at DESC LIMIT 10"
        ):
            print(row)

        print("\nAccounts:")
        for row in conn.execute(
            """
            SELECT account_id, user_id, provider_id, access_token_expires_at,
                   refresh_token IS NOT NULL
            FROM accounts
            ORDER BY updated_at DESC
            LIMIT 10
            """
        ):
            print(row)

        print("\nSessions:")
        row = conn.execute("SELECT COUNT(*) FROM sessions").fetchone()
        print("count:", row[0] if row else 0)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
