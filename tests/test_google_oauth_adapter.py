from unittest.mock import Mock
from urllib.parse import parse_qs, urlparse

import pytest

from drive_search.adapters import google_oauth_adapter
from drive_search.adapters.google_oauth_adapter import GoogleOAuthAdapter


def _adapter() -> GoogleOAuthAdapter:
    return GoogleOAuthAdapter(
        client_id="client-1",
        client_secret="secret-1",
        redirect_uri="http://localhost:8080/",
    )


def _response(status_code: int, payload: dict | None = None, text: str = "") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    response.text = text
    return response


def test_build_auth_url_requests_drive_scope_and_offline_access() -> None:
    url = _adapter().build_auth_url("state-1")

    parsed = urlparse(url)
    params = parse_qs(parsed.query)
    assert parsed.netloc == "accounts.google.com"
    assert params["client_id"] == ["client-1"]
    assert params["redirect_uri"] == ["http://localhost:8080/"]
    assert params["state"] == ["state-1"]
    assert params["access_type"] == ["offline"]
    assert "https://www.googleapis.com/auth/drive.readonly" in params["scope"][0].split(" ")


def test_exchange_code_returns_tokens(monkeypatch) -> None:
    post = Mock(
        return_value=_response(
            200,
            {
                "access_token": "access-1",
                "refresh_token": "refresh-1",
                "expires_in": 1200,
                "scope": "openid",
            },
        )
    )
    monkeypatch.setattr(google_oauth_adapter.requests, "post", post)

    tokens = _adapter().exchange_code("code-1")

    assert tokens.access_token == "access-1"
    assert tokens.refresh_token == "refresh-1"
    assert tokens.expires_in == 1200
    assert post.call_args.kwargs["data"]["code"] == "code-1"
    assert post.call_args.kwargs["data"]["grant_type"] == "authorization_code"


def test_exchange_code_raises_on_error(monkeypatch) -> None:
    monkeypatch.setattr(
        google_oauth_adapter.requests,
        "post",
        Mock(return_value=_response(400, text="invalid_grant")),
    )

    with pytest.raises(RuntimeError, match="Token exchange failed: 400 invalid_grant"):
        _adapter().exchange_code("code-1")


def test_exchange_code_requires_client_credentials() -> None:
    adapter = GoogleOAuthAdapter("", "", "http://localhost:8080/")

    with pytest.raises(RuntimeError, match="GOOGLE_CLIENT_ID"):
        adapter.exchange_code("code-1")


def test_fetch_profile_reads_userinfo(monkeypatch) -> None:
    get = Mock(
        return_value=_response(
            200,
            {"sub": "sub-1", "email": "ada@example.com", "name": "Ada", "picture": "pic"},
        )
    )
    monkeypatch.setattr(google_oauth_adapter.requests, "get", get)

    profile = _adapter().fetch_profile("access-1")

    assert profile.subject == "sub-1"
    assert profile.email == "ada@example.com"
    assert profile.name == "Ada"
    assert get.call_args.kwargs["headers"] == {"Authorization": "Bearer access-1"}


def test_fetch_profile_requires_subject_and_email(monkeypatch) -> None:
    monkeypatch.setattr(
        google_oauth_adapter.requests,
        "get",
        Mock(return_value=_response(200, {"email": "ada@example.com"})),
    )

    with pytest.raises(RuntimeError, match="missing the subject or email"):
        _adapter().fetch_profile("access-1")
