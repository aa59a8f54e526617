from __future__ import annotations

from typing import Protocol, runtime_checkable

from drive_search.domain.models import FilePage


@runtime_checkable
class DrivePort(Protocol):
    def list_files_page(self, page_token: str | None = None) -> FilePage:
        """Return one page of file metadata, starting at page_token."""
