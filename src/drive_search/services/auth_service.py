from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from drive_search.domain.models import Session, User
from drive_search.ports.oauth_port import OAuthPort
from drive_search.ports.storage_port import StoragePort

logger = logging.getLogger(__name__)

PROVIDER_ID = "google"
SESSION_TTL = timedelta(days=30)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthService:
    def __init__(
        self,
        oauth: OAuthPort,
        storage: StoragePort,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._oauth = oauth
        self._storage = storage
        self._clock = clock

    def build_sign_in_url(self, state: str) -> str:
        return self._oauth.build_auth_url(state)

    def complete_sign_in(self, code: str) -> Session:
        tokens = self._oauth.exchange_code(code)
        profile = self._oauth.fetch_profile(tokens.access_token)
        user = self._storage.get_user_by_email(profile.email)
        if user is None:
            user = self._storage.create_user(profile.name, profile.email, profile.picture)
            logger.info("Created user %s", user.user_id)
        else:
            self._storage.update_user(user.user_id, profile.name, profile.picture)
        self._storage.upsert_account(
            user_id=user.user_id,
            provider_id=PROVIDER_ID,
            provider_account_id=profile.subject,
            tokens=tokens,
        )
        session = self._storage.create_session(user.user_id, self._clock() + SESSION_TTL)
        logger.info("Signed in user %s", user.user_id)
        return session

    def current_user(self, session_token: str | None) -> User | None:
        if not session_token:
            return None
        session = self._storage.get_session(session_token)
        if session is None:
            return None
        if session.expires_at <= self._clock():
            logger.info("Session for user %s expired", session.user_id)
            self._storage.delete_session(session_token)
            return None
        return self._storage.get_user(session.user_id)

    def sign_out(self, session_token: str | None) -> None:
        if not session_token:
            return
        self._storage.delete_session(session_token)
