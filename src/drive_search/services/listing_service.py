from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from drive_search.domain.models import DriveFile, FilePage
from drive_search.ports.drive_port import DrivePort
from drive_search.ports.storage_port import StoragePort

logger = logging.getLogger(__name__)


class PageLimitExceeded(RuntimeError):
    pass


class ListingService:
    def __init__(
        self,
        storage: StoragePort,
        drive_factory: Callable[[str], DrivePort],
    ) -> None:
        self._storage = storage
        self._drive_factory = drive_factory

    def iter_pages(self, user_id: str, max_pages: int | None = None) -> Iterator[FilePage]:
        """Yield Drive pages for the user's linked account until exhausted.

        Yields nothing when the user has no linked account. With ``max_pages``
        set, raises PageLimitExceeded once that many pages were read and the
        API still reports more.
        """
        account = self._storage.get_account_by_user_id(user_id)
        if account is None:
            logger.info("No linked account for user %s", user_id)
            return
        drive = self._drive_factory(account.access_token or "")
        page_token: str | None = None
        pages = 0
        while True:
            if max_pages is not None and pages >= max_pages:
                raise PageLimitExceeded(
                    f"Drive listing exceeded {max_pages} pages for user {user_id}."
                )
            page = drive.list_files_page(page_token)
            pages += 1
            yield page
            page_token = page.next_page_token
            if not page_token:
                break

    def list_files(self, user_id: str, max_pages: int | None = None) -> list[DriveFile]:
        files: list[DriveFile] = []
        for page in self.iter_pages(user_id, max_pages=max_pages):
            files.extend(page.files)
        logger.info("Listed %d files for user %s", len(files), user_id)
        return files
