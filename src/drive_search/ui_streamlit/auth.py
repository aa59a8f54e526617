from __future__ import annotations

import http.server
import json
import logging
import socketserver
import tempfile
import threading
import webbrowser
from pathlib import Path
from urllib.parse import parse_qs, urlparse
from uuid import uuid4

import keyring
import streamlit as st

from drive_search.domain.models import User
from drive_search.services.auth_service import AuthService
from drive_search.settings import OAUTH_REDIRECT_URI

logger = logging.getLogger(__name__)

_KEYRING_SERVICE = "drive-search"
_KEYRING_SESSION_TOKEN = "session_token"
_OAUTH_STATE: str | None = None
_OAUTH_CODE: str | None = None
_OAUTH_ERROR: str | None = None
_OAUTH_EVENT = threading.Event()
_OAUTH_SERVER_STARTED = False
_OAUTH_RESULT_FILE = Path(tempfile.gettempdir()) / "drive_search_oauth_result.json"


def _get_keyring_value(key: str) -> str | None:
    try:
        return keyring.get_password(_KEYRING_SERVICE, key)
    except Exception:
        return None


def _set_keyring_value(key: str, value: str) -> bool:
    try:
        keyring.set_password(_KEYRING_SERVICE, key, value)
        return True
    except Exception:
        return False


def _delete_keyring_value(key: str) -> None:
    try:
        keyring.delete_password(_KEYRING_SERVICE, key)
    except Exception:
        return


def _write_oauth_result(code: str | None, state: str | None, error: str | None) -> None:
    try:
        _OAUTH_RESULT_FILE.write_text(
            json.dumps({"code": code, "state": state, "error": error})
        )
    except OSError:
        return


def _read_oauth_result() -> dict | None:
    try:
        if not _OAUTH_RESULT_FILE.exists():
            return None
        return json.loads(_OAUTH_RESULT_FILE.read_text())
    except (OSError, ValueError):
        return None


def _clear_oauth_result() -> None:
    try:
        if _OAUTH_RESULT_FILE.exists():
            _OAUTH_RESULT_FILE.unlink()
    except OSError:
        return


def oauth_callback_bind_address(redirect_uri: str = OAUTH_REDIRECT_URI) -> tuple[str, int]:
    parsed = urlparse(redirect_uri)
    host = parsed.hostname or "localhost"
    port = parsed.port
    if port is None:
        port = 443 if parsed.scheme == "https" else 80
    return host, port


def _start_oauth_callback_server() -> None:
    global _OAUTH_SERVER_STARTED
    if _OAUTH_SERVER_STARTED:
        return
    callback_host, callback_port = oauth_callback_bind_address()

    class OAuthHandler(http.server.BaseHTTPRequestHandler):
        def do_GET(self) -> None:
            global _OAUTH_CODE, _OAUTH_ERROR
            params = parse_qs(urlparse(self.path).query)
            code = params.get("code", [None])[0]
            state = params.get("state", [None])[0]
            if not code:
                _OAUTH_ERROR = params.get("error", ["Missing authorization code."])[0]
            elif state != _OAUTH_STATE:
                _OAUTH_ERROR = "State mismatch."
            else:
                _OAUTH_CODE = code
            _write_oauth_result(_OAUTH_CODE, state, _OAUTH_ERROR)
            _OAUTH_EVENT.set()
            self.send_response(200)
            self.send_header("Content-Type", "text/html")
            self.end_headers()
            self.wfile.write(
                b"<html><body><h3>Sign-in received. You can close this tab.</h3></body></html>"
            )

        def log_message(self, format: str, *args: object) -> None:
            return

    def _serve() -> None:
        global _OAUTH_SERVER_STARTED, _OAUTH_ERROR
        try:
            with socketserver.TCPServer((callback_host, callback_port), OAuthHandler) as httpd:
                httpd.handle_request()
        except OSError as exc:
            _OAUTH_ERROR = (
                f"OAuth callback server failed to start on {callback_host}:{callback_port}: {exc}"
            )
            _OAUTH_EVENT.set()
        finally:
            _OAUTH_SERVER_STARTED = False

    thread = threading.Thread(target=_serve, daemon=True)
    thread.start()
    _OAUTH_SERVER_STARTED = True


def current_session_token() -> str | None:
    token = st.session_state.get("session_token")
    if token:
        return token
    token = _get_keyring_value(_KEYRING_SESSION_TOKEN)
    if token:
        st.session_state["session_token"] = token
    return token


def resolve_user(auth_service: AuthService) -> User | None:
    token = current_session_token()
    user = auth_service.current_user(token)
    if user is None and token:
        st.session_state["session_token"] = None
        _delete_keyring_value(_KEYRING_SESSION_TOKEN)
    return user


def _begin_sign_in(auth_service: AuthService) -> None:
    global _OAUTH_STATE, _OAUTH_CODE, _OAUTH_ERROR
    _OAUTH_STATE = str(uuid4())
    st.session_state["oauth_state"] = _OAUTH_STATE
    _OAUTH_CODE = None
    _OAUTH_ERROR = None
    _OAUTH_EVENT.clear()
    _clear_oauth_result()
    _start_oauth_callback_server()
    auth_url = auth_service.build_sign_in_url(_OAUTH_STATE)
    st.session_state["oauth_in_progress"] = True
    st.session_state["oauth_auth_url"] = auth_url
    try:
        if not webbrowser.open(auth_url, new=2):
            st.info("Open the link below to sign in, then return here.")
    except webbrowser.Error:
        st.info("Open the link below to sign in, then return here.")


def _finish_sign_in(auth_service: AuthService) -> None:
    global _OAUTH_CODE, _OAUTH_ERROR
    oauth_result = _read_oauth_result()
    if oauth_result and not _OAUTH_EVENT.is_set():
        _OAUTH_CODE = oauth_result.get("code")
        _OAUTH_ERROR = oauth_result.get("error")
        _OAUTH_EVENT.set()
    if not _OAUTH_EVENT.is_set():
        return
    st.session_state["oauth_in_progress"] = False
    state = oauth_result.get("state") if oauth_result else None
    if _OAUTH_ERROR:
        st.error(f"OAuth error: {_OAUTH_ERROR}")
    elif state and state != st.session_state.get("oauth_state"):
        st.error("OAuth error: State mismatch.")
    else:
        try:
            session = auth_service.complete_sign_in(_OAUTH_CODE)
        except Exception as exc:
            logger.exception("Sign-in failed")
            st.error(f"Sign-in failed: {exc}")
        else:
            st.session_state["session_token"] = session.session_token
            if not _set_keyring_value(_KEYRING_SESSION_TOKEN, session.session_token):
                st.warning(
                    "Signed in for this browser session, but the OS keychain is unavailable. "
                    "You'll need to sign in again next time."
                )
    _clear_oauth_result()
    _OAUTH_EVENT.clear()


def render_auth_controls(auth_service: AuthService, user: User | None) -> None:
    global _OAUTH_STATE
    if st.session_state.get("oauth_state"):
        _OAUTH_STATE = st.session_state.get("oauth_state")

    if user is not None:
        st.caption(f"Signed in as {user.name} ({user.email})")
        if st.button("Sign out"):
            auth_service.sign_out(current_session_token())
            st.session_state["session_token"] = None
            st.session_state["files"] = None
            st.session_state["files_user_id"] = None
            _delete_keyring_value(_KEYRING_SESSION_TOKEN)
            st.rerun()
        return

    if st.button("Sign in"):
        _begin_sign_in(auth_service)

    if st.session_state.get("oauth_in_progress") and st.session_state.get("oauth_auth_url"):
        st.markdown(f"[Sign in with Google]({st.session_state['oauth_auth_url']})")
        if st.button("I've signed in"):
            st.rerun()
        _finish_sign_in(auth_service)
        if st.session_state.get("session_token"):
            st.rerun()
