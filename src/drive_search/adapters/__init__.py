from .google_drive_adapter import GoogleDriveAdapter
from .google_oauth_adapter import GoogleOAuthAdapter
from .sqlite_storage import SQLiteStorage

__all__ = ["GoogleDriveAdapter", "GoogleOAuthAdapter", "SQLiteStorage"]
