from __future__ import annotations

import requests

from drive_search.domain.models import OAuthProfile, OAuthTokens
from drive_search.ports.oauth_port import OAuthPort

OAUTH_SCOPES = (
    "openid",
    "email",
    "profile",
    "https://www.googleapis.com/auth/drive.readonly",
)


class GoogleOAuthAdapter(OAuthPort):
    _AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    _TOKEN_URL = "https://oauth2.googleapis.com/token"
    _USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 20,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._redirect_uri = redirect_uri
        self._timeout = timeout

    def build_auth_url(self, state: str) -> str:
        params = {
            "client_id": self._client_id,
            "redirect_uri": self._redirect_uri,
            "response_type": "code",
            "scope": " ".join(OAUTH_SCOPES),
            "access_type": "offline",
            "prompt": "consent",
            "state": state,
        }
        query = "&".join(
            f"{key}={requests.utils.quote(str(value), safe='')}"
            for key, value in params.items()
        )
        return f"{self._AUTH_URL}?{query}"

    def exchange_code(self, code: str) -> OAuthTokens:
        if not self._client_id or not self._client_secret:
            raise RuntimeError("GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET are required for OAuth.")
        response = requests.post(
            self._TOKEN_URL,
            data={
                "code": code,
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "redirect_uri": self._redirect_uri,
                "grant_type": "authorization_code",
            },
            timeout=self._timeout,
        )
        if response.status_code >= 400:
            raise RuntimeError(f"Token exchange failed: {response.status_code} {response.text}")
        token_data = response.json()
        access_token = token_data.get("access_token", "")
        if not access_token:
            raise RuntimeError("OAuth did not return an access token.")
        return OAuthTokens(
            access_token=access_token,
            refresh_token=token_data.get("refresh_token"),
            id_token=token_data.get("id_token"),
            expires_in=int(token_data.get("expires_in", 3600)),
            scope=token_data.get("scope"),
        )

    def fetch_profile(self, access_token: str) -> OAuthProfile:
        response = requests.get(
            self._USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=self._timeout,
        )
        if response.status_code >= 400:
            raise RuntimeError(f"Userinfo request failed: {response.status_code} {response.text}")
        info = response.json()
        subject = info.get("sub", "")
        email = info.get("email", "")
        if not subject or not email:
            raise RuntimeError("Userinfo response is missing the subject or email.")
        return OAuthProfile(
            subject=subject,
            email=email,
            name=info.get("name") or email,
            picture=info.get("picture"),
        )
