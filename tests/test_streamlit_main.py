import logging
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import Mock

import pytest
from streamlit.testing.v1 import AppTest

from drive_search import container
from drive_search.domain.models import DriveFile, User
from drive_search.ui_streamlit import auth

_MAIN = Path(__file__).resolve().parents[1] / "src" / "drive_search" / "ui_streamlit" / "main.py"


def _user() -> User:
    return User(
        user_id="user-1",
        name="Ada",
        email="ada@example.com",
        image=None,
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def services(monkeypatch) -> dict[str, Mock]:
    built = {"auth_service": Mock(), "listing_service": Mock()}
    built["auth_service"].current_user.return_value = None
    built["listing_service"].list_files.return_value = []
    monkeypatch.setattr(container, "build_services", lambda: built)
    monkeypatch.setattr(auth, "_get_keyring_value", lambda key: None)
    monkeypatch.setattr(auth, "_delete_keyring_value", lambda key: None)
    return built


def _app(session_token: str | None = None) -> AppTest:
    app = AppTest.from_file(str(_MAIN), default_timeout=10)
    if session_token:
        app.session_state["session_token"] = session_token
    return app


def _button_labels(app: AppTest) -> list[str]:
    return [button.label for button in app.button]


def test_signed_out_shows_sign_in_and_skips_listing(services, caplog) -> None:
    caplog.set_level(logging.INFO, logger="drive_search.ui_streamlit.main")

    app = _app()
    app.run()

    assert not app.exception
    assert "Sign in" in _button_labels(app)
    assert "Sign out" not in _button_labels(app)
    services["listing_service"].list_files.assert_not_called()
    assert "no user id" in caplog.messages


def test_signed_in_lists_files_once_per_user(services) -> None:
    services["auth_service"].current_user.return_value = _user()
    services["listing_service"].list_files.return_value = [
        DriveFile(file_id="f1", name="Quarterly plan", mime_type="text/plain"),
        DriveFile(file_id="d1", name="Archive", mime_type="application/vnd.google-apps.folder"),
    ]

    app = _app(session_token="s-1")
    app.run()
    app.run()

    assert not app.exception
    assert "Sign out" in _button_labels(app)
    assert "Sign in" not in _button_labels(app)
    services["auth_service"].current_user.assert_called_with("s-1")
    services["listing_service"].list_files.assert_called_once_with("user-1")
    assert app.session_state["files_user_id"] == "user-1"
    rendered = " ".join(markdown.value for markdown in app.markdown)
    assert "https://drive.google.com/file/d/f1/view" in rendered
    assert "https://drive.google.com/drive/folders/d1" in rendered


def test_listing_failure_shows_error(services) -> None:
    services["auth_service"].current_user.return_value = _user()
    services["listing_service"].list_files.side_effect = RuntimeError(
        "Auth failed while attempting to list files."
    )

    app = _app(session_token="s-1")
    app.run()

    assert not app.exception
    assert len(app.error) == 1
    assert "Listing files failed: Auth failed" in app.error[0].value
    assert app.session_state["files_user_id"] is None
