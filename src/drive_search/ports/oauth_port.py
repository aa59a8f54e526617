from __future__ import annotations

from typing import Protocol, runtime_checkable

from drive_search.domain.models import OAuthProfile, OAuthTokens


@runtime_checkable
class OAuthPort(Protocol):
    def build_auth_url(self, state: str) -> str:
        """Return the provider consent URL for the given state."""

    def exchange_code(self, code: str) -> OAuthTokens:
        """Exchange an authorization code for tokens."""

    def fetch_profile(self, access_token: str) -> OAuthProfile:
        """Return the signed-in user's profile."""
