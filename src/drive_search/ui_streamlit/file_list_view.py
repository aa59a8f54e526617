from __future__ import annotations

import re

import streamlit as st

from drive_search.domain.file_filter import build_rows, filter_files
from drive_search.domain.mime_icons import material_shortcode
from drive_search.domain.models import DriveFile

_MARKDOWN_SPECIALS = re.compile(r"([\\`*_{}\[\]()#+\-.!|<>~$])")


def _escape_markdown(value: str) -> str:
    return _MARKDOWN_SPECIALS.sub(r"\\\1", value)


def render_file_list(files: list[DriveFile]) -> None:
    text = st.text_input("Filter", key="filter_text", placeholder="name")
    rows = build_rows(filter_files(files, text))
    st.caption(f"{len(rows)} of {len(files)} files")
    with st.container():
        for row in rows:
            st.markdown(
                f"{material_shortcode(row.icon)} [{_escape_markdown(row.name)}]({row.url})"
            )
