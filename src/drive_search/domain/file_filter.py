from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from drive_search.domain.links import drive_link
from drive_search.domain.mime_icons import icon_for_mime_type
from drive_search.domain.models import DriveFile


@dataclass(frozen=True)
class FileRow:
    name: str
    icon: str
    url: str


def filter_files(files: Iterable[DriveFile], text: str) -> list[DriveFile]:
    """Keep files whose name contains ``text`` (case-sensitive).

    An empty filter keeps everything; a file without a name never matches a
    non-empty filter.
    """
    if not text:
        return list(files)
    return [file for file in files if file.name is not None and text in file.name]


def build_rows(files: Iterable[DriveFile]) -> list[FileRow]:
    return [
        FileRow(
            name=file.name or "",
            icon=icon_for_mime_type(file.mime_type),
            url=drive_link(file.file_id, file.mime_type),
        )
        for file in files
    ]
