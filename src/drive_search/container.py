from __future__ import annotations

from typing import Any

from drive_search.adapters.google_drive_adapter import GoogleDriveAdapter
from drive_search.adapters.google_oauth_adapter import GoogleOAuthAdapter
from drive_search.adapters.sqlite_storage import SQLiteStorage
from drive_search.services.auth_service import AuthService
from drive_search.services.listing_service import ListingService
from drive_search.settings import (
    DATABASE_URL,
    GOOGLE_CLIENT_ID,
    GOOGLE_CLIENT_SECRET,
    OAUTH_REDIRECT_URI,
    sqlite_path_from_url,
)


def build_services(
    database_url: str = DATABASE_URL,
    client_id: str = GOOGLE_CLIENT_ID,
    client_secret: str = GOOGLE_CLIENT_SECRET,
    redirect_uri: str = OAUTH_REDIRECT_URI,
) -> dict[str, Any]:
    storage = SQLiteStorage(sqlite_path_from_url(database_url))
    oauth = GoogleOAuthAdapter(client_id, client_secret, redirect_uri)
    return {
        "auth_service": AuthService(oauth, storage),
        "listing_service": ListingService(storage, GoogleDriveAdapter),
        "oauth": oauth,
        "storage": storage,
    }
