from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(_REPO_ROOT / ".env", override=False)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./drive_search.db")
DATABASE_SECRET = os.getenv("DATABASE_SECRET", "")
GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID", "")
GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET", "")
OAUTH_REDIRECT_URI = os.getenv("OAUTH_REDIRECT_URI", "http://localhost:8080/").strip()
if not OAUTH_REDIRECT_URI:
    OAUTH_REDIRECT_URI = "http://localhost:8080/"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

_REMOTE_SCHEMES = ("libsql://", "http://", "https://", "ws://", "wss://")


def sqlite_path_from_url(database_url: str) -> str:
    """Resolve DATABASE_URL to a local SQLite file path.

    Accepts ``sqlite:///relative/or/absolute``, ``file:path`` and bare paths.
    Remote libSQL endpoints need an auth token and a network driver, so they
    are rejected here. In-memory databases are rejected too: storage opens a
    new connection per operation, and each one would see an empty database.
    """
    url = (database_url or "").strip()
    if not url:
        raise ValueError("DATABASE_URL is empty.")
    if url.lower().startswith(_REMOTE_SCHEMES):
        raise ValueError(
            f"Remote database URLs are not supported by the sqlite3 driver: {url}"
        )
    if url.startswith("sqlite:///"):
        path = url[len("sqlite:///"):]
    elif url.startswith("sqlite://"):
        path = url[len("sqlite://"):]
    elif url.startswith("file:"):
        path = url[len("file:"):]
    else:
        path = url
    if not path or path == ":memory:":
        raise ValueError(f"DATABASE_URL must point at a database file: {url}")
    return path


def configure_logging(level: str | None = None) -> None:
    app_log = logging.getLogger("drive_search")
    app_log.setLevel(level or LOG_LEVEL)
    if not app_log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s:     %(name)s: %(message)s"))
        app_log.addHandler(handler)
