from drive_search.domain.file_filter import FileRow, build_rows, filter_files
from drive_search.domain.models import DriveFile

_FILES = [
    DriveFile(file_id="1", name="Budget 2024", mime_type="application/vnd.google-apps.spreadsheet"),
    DriveFile(file_id="2", name="budget notes", mime_type="text/plain"),
    DriveFile(file_id="3", name=None, mime_type="image/png"),
    DriveFile(file_id="4", name="Photos", mime_type="application/vnd.google-apps.folder"),
]


def test_empty_filter_keeps_every_file() -> None:
    assert filter_files(_FILES, "") == _FILES


def test_filter_is_case_sensitive_substring() -> None:
    assert filter_files(_FILES, "Budget") == [_FILES[0]]
    assert filter_files(_FILES, "udget") == [_FILES[0], _FILES[1]]


def test_filter_excludes_files_without_name() -> None:
    result = filter_files(_FILES, "o")

    assert _FILES[2] not in result
    assert result == [_FILES[1], _FILES[3]]


def test_filter_without_matches_is_empty() -> None:
    assert filter_files(_FILES, "zzz") == []


def test_build_rows_resolves_icon_and_link() -> None:
    rows = build_rows([_FILES[3], _FILES[2]])

    assert rows == [
        FileRow(name="Photos", icon="folder", url="https://drive.google.com/drive/folders/4"),
        FileRow(name="", icon="file-image", url="https://drive.google.com/file/d/3/view"),
    ]
