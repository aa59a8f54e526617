from __future__ import annotations

from datetime import datetime
from typing import Protocol

from drive_search.domain.models import Account, OAuthTokens, Session, User


class StoragePort(Protocol):
    def get_account_by_user_id(self, user_id: str) -> Account | None:
        """Return the first linked account for a user, or None."""

    def upsert_account(
        self,
        user_id: str,
        provider_id: str,
        provider_account_id: str,
        tokens: OAuthTokens,
    ) -> Account:
        """Create or refresh the account for a provider identity."""

    def create_user(self, name: str, email: str, image: str | None) -> User:
        """Create and persist a user."""

    def update_user(self, user_id: str, name: str, image: str | None) -> None:
        """Update a user's display fields."""

    def get_user(self, user_id: str) -> User | None:
        """Return a user by id, or None if missing."""

    def get_user_by_email(self, email: str) -> User | None:
        """Return a user by email, or None if missing."""

    def create_session(self, user_id: str, expires_at: datetime) -> Session:
        """Create and persist a session."""

    def get_session(self, session_token: str) -> Session | None:
        """Return a session by token, or None if missing."""

    def delete_session(self, session_token: str) -> None:
        """Remove a session."""
