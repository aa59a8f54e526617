from __future__ import annotations

import logging

import requests

from drive_search.domain.models import DriveFile, FilePage
from drive_search.ports.drive_port import DrivePort

logger = logging.getLogger(__name__)

PAGE_SIZE = 100
LIST_FIELDS = "nextPageToken, files(id, name, mimeType)"


class GoogleDriveAdapter(DrivePort):
    _BASE_URL = "https://www.googleapis.com/drive/v3"

    def __init__(
        self,
        access_token: str,
        page_size: int = PAGE_SIZE,
        timeout: float = 20,
        session: requests.Session | None = None,
    ) -> None:
        self._access_token = access_token
        self._page_size = page_size
        self._timeout = timeout
        self._http = session or requests.Session()

    def list_files_page(self, page_token: str | None = None) -> FilePage:
        # No "q" parameter: every file the token can see is listed, not only
        # the ones owned by the user ("'me' in owners").
        params: dict[str, object] = {
            "pageSize": self._page_size,
            "fields": LIST_FIELDS,
        }
        if page_token:
            params["pageToken"] = page_token
        response = self._http.get(
            f"{self._BASE_URL}/files",
            headers=self._auth_header(),
            params=params,
            timeout=self._timeout,
        )
        self._raise_for_status(response, context="list files")
        payload = response.json()
        files = [
            DriveFile(
                file_id=item.get("id"),
                name=item.get("name"),
                mime_type=item.get("mimeType"),
            )
            for item in payload.get("files") or []
        ]
        next_page_token = payload.get("nextPageToken") or None
        logger.debug("Fetched %d files (more: %s)", len(files), bool(next_page_token))
        return FilePage(files=files, next_page_token=next_page_token)

    def _auth_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._access_token}"}

    @staticmethod
    def _raise_for_status(response: requests.Response, context: str) -> None:
        if response.status_code in (401, 403):
            raise RuntimeError(f"Auth failed while attempting to {context}.")
        if response.status_code == 404:
            raise RuntimeError(f"Resource not found or no access while attempting to {context}.")
        if response.status_code >= 400:
            raise RuntimeError(
                f"Drive API error {response.status_code} while attempting to {context}."
            )
