from __future__ import annotations

import secrets
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from drive_search.domain.models import Account, OAuthTokens, Session, User
from drive_search.ports.storage_port import StoragePort


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_dt(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)


class SQLiteStorage(StoragePort):
    def __init__(self, sqlite_path: str) -> None:
        self._sqlite_path = sqlite_path
        self._ensure_schema()

    def get_account_by_user_id(self, user_id: str) -> Account | None:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    """
                    SELECT account_id, user_id, provider_id, provider_account_id,
                           access_token, refresh_token, id_token,
                           access_token_expires_at, scope, created_at, updated_at
                    FROM accounts
                    WHERE user_id = ?
                    ORDER BY created_at ASC
                    LIMIT 1
                    """,
                    (user_id,),
                ).fetchone()
            if row is None:
                return None
            return self._account_from_row(row)
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to fetch account") from exc

    def upsert_account(
        self,
        user_id: str,
        provider_id: str,
        provider_account_id: str,
        tokens: OAuthTokens,
    ) -> Account:
        now = _utcnow()
        expires_at = now + timedelta(seconds=tokens.expires_in)
        try:
            with self._connect() as conn:
                existing = conn.execute(
                    """
                    SELECT account_id, refresh_token, created_at
                    FROM accounts
                    WHERE provider_id = ? AND provider_account_id = ?
                    """,
                    (provider_id, provider_account_id),
                ).fetchone()
                if existing is None:
                    account_id = str(uuid4())
                    refresh_token = tokens.refresh_token
                    created_at = now
                    conn.execute(
                        """
                        INSERT INTO accounts(
                            account_id, user_id, provider_id, provider_account_id,
                            access_token, refresh_token, id_token,
                            access_token_expires_at, scope, created_at, updated_at
                        )
                        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            account_id,
                            user_id,
                            provider_id,
                            provider_account_id,
                            tokens.access_token,
                            refresh_token,
                            tokens.id_token,
                            expires_at.isoformat(),
                            tokens.scope,
                            now.isoformat(),
                            now.isoformat(),
                        ),
                    )
                else:
                    account_id = existing[0]
                    # Google only returns a refresh token on first consent.
                    refresh_token = tokens.refresh_token or existing[1]
                    created_at = datetime.fromisoformat(existing[2])
                    conn.execute(
                        """
                        UPDATE accounts
                        SET user_id = ?, access_token = ?, refresh_token = ?, id_token = ?,
                            access_token_expires_at = ?, scope = ?, updated_at = ?
                        WHERE account_id = ?
                        """,
                        (
                            user_id,
                            tokens.access_token,
                            refresh_token,
                            tokens.id_token,
                            expires_at.isoformat(),
                            tokens.scope,
                            now.isoformat(),
                            account_id,
                        ),
                    )
            return Account(
                account_id=account_id,
                user_id=user_id,
                provider_id=provider_id,
                provider_account_id=provider_account_id,
                access_token=tokens.access_token,
                refresh_token=refresh_token,
                id_token=tokens.id_token,
                access_token_expires_at=expires_at,
                scope=tokens.scope,
                created_at=created_at,
                updated_at=now,
            )
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to save account") from exc

    def create_user(self, name: str, email: str, image: str | None) -> User:
        user = User(
            user_id=str(uuid4()),
            name=name,
            email=email,
            image=image,
            created_at=_utcnow(),
        )
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO users(user_id, name, email, image, created_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (user.user_id, user.name, user.email, user.image, user.created_at.isoformat()),
                )
            return user
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to create user") from exc

    def update_user(self, user_id: str, name: str, image: str | None) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    "UPDATE users SET name = ?, image = ? WHERE user_id = ?",
                    (name, image, user_id),
                )
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to update user") from exc

    def get_user(self, user_id: str) -> User | None:
        return self._fetch_user("user_id", user_id)

    def get_user_by_email(self, email: str) -> User | None:
        return self._fetch_user("email", email)

    def create_session(self, user_id: str, expires_at: datetime) -> Session:
        session = Session(
            session_token=secrets.token_urlsafe(32),
            user_id=user_id,
            expires_at=expires_at,
            created_at=_utcnow(),
        )
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO sessions(session_token, user_id, expires_at, created_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (
                        session.session_token,
                        session.user_id,
                        session.expires_at.isoformat(),
                        session.created_at.isoformat(),
                    ),
                )
            return session
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to create session") from exc

    def get_session(self, session_token: str) -> Session | None:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    """
                    SELECT session_token, user_id, expires_at, created_at
                    FROM sessions
                    WHERE session_token = ?
                    """,
                    (session_token,),
                ).fetchone()
            if row is None:
                return None
            return Session(
                session_token=row[0],
                user_id=row[1],
                expires_at=datetime.fromisoformat(row[2]),
                created_at=datetime.fromisoformat(row[3]),
            )
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to fetch session") from exc

    def delete_session(self, session_token: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute("DELETE FROM sessions WHERE session_token = ?", (session_token,))
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to delete session") from exc

    def _fetch_user(self, column: str, value: str) -> User | None:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    f"""
                    SELECT user_id, name, email, image, created_at
                    FROM users
                    WHERE {column} = ?
                    """,
                    (value,),
                ).fetchone()
            if row is None:
                return None
            return User(
                user_id=row[0],
                name=row[1],
                email=row[2],
                image=row[3],
                created_at=datetime.fromisoformat(row[4]),
            )
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to fetch user") from exc

    @staticmethod
    def _account_from_row(row: tuple) -> Account:
        return Account(
            account_id=row[0],
            user_id=row[1],
            provider_id=row[2],
            provider_account_id=row[3],
            access_token=row[4],
            refresh_token=row[5],
            id_token=row[6],
            access_token_expires_at=_parse_dt(row[7]),
            scope=row[8],
            created_at=_parse_dt(row[9]),
            updated_at=_parse_dt(row[10]),
        )

    def _ensure_schema(self) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS users(
                        user_id TEXT PRIMARY KEY,
                        name TEXT NOT NULL,
                        email TEXT NOT NULL UNIQUE,
                        image TEXT,
                        created_at TEXT
                    )
                    """
                )
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS accounts(
                        account_id TEXT PRIMARY KEY,
                        user_id TEXT NOT NULL,
                        provider_id TEXT NOT NULL,
                        provider_account_id TEXT NOT NULL,
                        access_token TEXT,
                        refresh_token TEXT,
                        id_token TEXT,
                        access_token_expires_at TEXT,
                        scope TEXT,
                        created_at TEXT,
                        updated_at TEXT,
                        UNIQUE(provider_id, provider_account_id)
                    )
                    """
                )
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS sessions(
                        session_token TEXT PRIMARY KEY,
                        user_id TEXT NOT NULL,
                        expires_at TEXT NOT NULL,
                        created_at TEXT
                    )
                    """
                )
                conn.execute(
                    "CREATE INDEX IF NOT EXISTS idx_accounts_user_id ON accounts(user_id)"
                )
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to initialize schema") from exc

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self._sqlite_path)
        try:
            with conn:
                yield conn
        finally:
            conn.close()
