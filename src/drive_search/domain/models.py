from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class DriveFile:
    file_id: str | None
    name: str | None
    mime_type: str | None


@dataclass
class FilePage:
    files: list[DriveFile] = field(default_factory=list)
    next_page_token: str | None = None


@dataclass
class User:
    user_id: str
    name: str
    email: str
    image: str | None
    created_at: datetime


@dataclass
class Account:
    account_id: str
    user_id: str
    provider_id: str
    provider_account_id: str
    access_token: str | None
    refresh_token: str | None = None
    id_token: str | None = None
    access_token_expires_at: datetime | None = None
    scope: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Session:
    session_token: str
    user_id: str
    expires_at: datetime
    created_at: datetime


@dataclass(frozen=True)
class OAuthTokens:
    access_token: str
    refresh_token: str | None
    id_token: str | None
    expires_in: int
    scope: str | None


@dataclass(frozen=True)
class OAuthProfile:
    subject: str
    email: str
    name: str
    picture: str | None
