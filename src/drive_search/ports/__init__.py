from .drive_port import DrivePort
from .oauth_port import OAuthPort
from .storage_port import StoragePort

__all__ = ["DrivePort", "OAuthPort", "StoragePort"]
