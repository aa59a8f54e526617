from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

FALLBACK_ICON = "file"

MIME_TYPE_ICONS: dict[str, str] = {
    "application/vnd.google-apps.audio": "music",
    "application/vnd.google-apps.document": "file-text",
    "application/vnd.google-apps.drive-sdk": "file-output",
    "application/vnd.google-apps.drawing": "file-image",
    "application/vnd.google-apps.file": "file",
    "application/vnd.google-apps.folder": "folder",
    "application/vnd.google-apps.form": "file-text",
    "application/vnd.google-apps.fusiontable": "file-spreadsheet",
    "application/vnd.google-apps.jam": "file-image",
    "application/vnd.google-apps.mail-layout": "file-text",
    "application/vnd.google-apps.map": "file-text",
    "application/vnd.google-apps.photo": "file-image",
    "application/vnd.google-apps.presentation": "presentation",
    "application/vnd.google-apps.script": "file-code",
    "application/vnd.google-apps.shortcut": "file-output",
    "application/vnd.google-apps.site": "file-text",
    "application/vnd.google-apps.spreadsheet": "file-spreadsheet",
    "application/vnd.google-apps.unknown": "file",
    "application/vnd.google-apps.vid": "file-video",
    "application/vnd.google-apps.video": "file-video",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "file-spreadsheet",
    "video/mp4": "file-video",
    "application/pdf": "file-text",
    "application/vnd.google.colaboratory": "file-text",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "file-text",
    "image/jpeg": "file-image",
    "text/plain": "file-text",
    "application/vnd.oasis.opendocument.text": "file-text",
    "application/msword": "file-text",
    "application/x-iwork-pages-sffpages": "file-text",
    "image/png": "file-image",
    "audio/mpeg": "music",
}

# Streamlit renders these through its ":material/<name>:" shortcode.
MATERIAL_GLYPHS: dict[str, str] = {
    "file": "draft",
    "file-text": "description",
    "file-output": "open_in_new",
    "file-image": "image",
    "file-spreadsheet": "table_chart",
    "file-video": "movie",
    "file-code": "code",
    "folder": "folder",
    "music": "music_note",
    "presentation": "slideshow",
}


def icon_for_mime_type(mime_type: str | None) -> str:
    icon = MIME_TYPE_ICONS.get(mime_type or "")
    if icon is None:
        logger.debug("No icon mapped for MIME type %r", mime_type)
        return FALLBACK_ICON
    return icon


def material_shortcode(icon: str) -> str:
    glyph = MATERIAL_GLYPHS.get(icon, MATERIAL_GLYPHS[FALLBACK_ICON])
    return f":material/{glyph}:"
