from __future__ import annotations

import logging
import sys
from pathlib import Path

import streamlit as st

_SRC_ROOT = Path(__file__).resolve().parents[2]
if str(_SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(_SRC_ROOT))

from drive_search.container import build_services
from drive_search.settings import configure_logging
from drive_search.ui_streamlit.auth import render_auth_controls, resolve_user
from drive_search.ui_streamlit.file_list_view import render_file_list

logger = logging.getLogger("drive_search.ui_streamlit.main")


def _init_state() -> None:
    st.session_state.setdefault("services", None)
    st.session_state.setdefault("session_token", None)
    st.session_state.setdefault("files", None)
    st.session_state.setdefault("files_user_id", None)
    st.session_state.setdefault("oauth_in_progress", False)
    st.session_state.setdefault("oauth_auth_url", None)
    st.session_state.setdefault("oauth_state", None)


def _get_services():
    if st.session_state["services"] is None:
        st.session_state["services"] = build_services()
    return st.session_state["services"]


def _load_files(services, user_id: str | None) -> None:
    if not user_id:
        logger.info("no user id")
        return
    if st.session_state.get("files_user_id") == user_id and st.session_state["files"] is not None:
        return
    logger.info("user id %s", user_id)
    with st.spinner("Loading files"):
        st.session_state["files"] = services["listing_service"].list_files(user_id)
    st.session_state["files_user_id"] = user_id


def main() -> None:
    st.set_page_config(page_title="Google Drive Search", layout="wide")
    configure_logging()
    _init_state()

    try:
        services = _get_services()
    except Exception as exc:
        st.error(f"Startup failed: {exc}")
        return

    header, controls = st.columns([3, 1])
    header.title("Google Drive Search")
    with controls:
        with st.spinner("Loading user"):
            try:
                user = resolve_user(services["auth_service"])
            except Exception as exc:
                st.error(f"Failed to load user: {exc}")
                return
        render_auth_controls(services["auth_service"], user)

    if user is None:
        _load_files(services, None)
        return

    if st.button("Refresh"):
        st.session_state["files"] = None
    try:
        _load_files(services, user.user_id)
    except Exception as exc:
        logger.exception("Listing Drive files failed")
        st.error(f"Listing files failed: {exc}")
        return
    render_file_list(st.session_state["files"] or [])


if __name__ == "__main__":
    main()
