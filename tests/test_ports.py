from drive_search.adapters.google_drive_adapter import GoogleDriveAdapter
from drive_search.adapters.google_oauth_adapter import GoogleOAuthAdapter
from drive_search.domain.models import FilePage
from drive_search.ports.drive_port import DrivePort
from drive_search.ports.oauth_port import OAuthPort


class StaticDrive:
    def list_files_page(self, page_token: str | None = None) -> FilePage:
        return FilePage()


def test_drive_port_runtime_checkable() -> None:
    assert isinstance(StaticDrive(), DrivePort)
    assert isinstance(GoogleDriveAdapter("token"), DrivePort)


def test_oauth_port_runtime_checkable() -> None:
    assert isinstance(GoogleOAuthAdapter("id", "secret", "http://localhost:8080/"), OAuthPort)
