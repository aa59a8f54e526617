from .file_filter import FileRow, build_rows, filter_files
from .links import drive_link
from .mime_icons import icon_for_mime_type
from .models import Account, DriveFile, FilePage, Session, User

__all__ = [
    "Account",
    "DriveFile",
    "FilePage",
    "FileRow",
    "Session",
    "User",
    "build_rows",
    "drive_link",
    "filter_files",
    "icon_for_mime_type",
]
