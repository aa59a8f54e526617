from __future__ import annotations

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
FOLDER_URL_TEMPLATE = "https://drive.google.com/drive/folders/{file_id}"
FILE_URL_TEMPLATE = "https://drive.google.com/file/d/{file_id}/view"


def drive_link(file_id: str | None, mime_type: str | None) -> str:
    """Return the Drive web URL that opens the item.

    Folders open in the folder browser, everything else in the file viewer.
    The id is interpolated as-is, without URL escaping.
    """
    if mime_type == FOLDER_MIME_TYPE:
        return FOLDER_URL_TEMPLATE.format(file_id=file_id)
    return FILE_URL_TEMPLATE.format(file_id=file_id)
