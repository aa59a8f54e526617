from drive_search.ui_streamlit.auth import oauth_callback_bind_address


def test_bind_address_from_redirect_uri() -> None:
    assert oauth_callback_bind_address("http://localhost:8080/") == ("localhost", 8080)
    assert oauth_callback_bind_address("https://example.com/callback") == ("example.com", 443)
    assert oauth_callback_bind_address("http://127.0.0.1/") == ("127.0.0.1", 80)
