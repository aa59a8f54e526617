import pytest

from drive_search.adapters.sqlite_storage import SQLiteStorage
from drive_search.container import build_services
from drive_search.services.auth_service import AuthService
from drive_search.services.listing_service import ListingService


def test_build_services_wires_sqlite_storage(tmp_path) -> None:
    db_path = tmp_path / "app.db"
    services = build_services(
        database_url=f"sqlite:///{db_path}",
        client_id="id",
        client_secret="secret",
        redirect_uri="http://localhost:8080/",
    )

    assert isinstance(services["storage"], SQLiteStorage)
    assert isinstance(services["auth_service"], AuthService)
    assert isinstance(services["listing_service"], ListingService)
    assert db_path.exists()
    assert services["listing_service"].list_files("nobody") == []


@pytest.mark.parametrize("database_url", ["sqlite://", "sqlite:///"])
def test_build_services_rejects_in_memory_database(database_url: str) -> None:
    with pytest.raises(ValueError, match="database file"):
        build_services(
            database_url=database_url,
            client_id="id",
            client_secret="secret",
            redirect_uri="http://localhost:8080/",
        )
