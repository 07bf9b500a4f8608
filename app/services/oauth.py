"""
Google federated login.

The provider is treated as an external collaborator: build the consent URL,
then trade the callback code for the user's profile. Handlers depend only on
`authorization_url` and `authenticate`, so tests swap in a stub.
"""

import logging
from urllib.parse import urlencode

import httpx

from app.models.schemas import OAuthProfile

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"


class OAuthError(Exception):
    pass


class GoogleOAuthProvider:
    def __init__(self, client_id, client_secret, redirect_uri, client: httpx.AsyncClient = None):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self._client = client

    @classmethod
    def from_settings(cls, settings):
        return cls(settings.GOOGLE_CLIENT_ID, settings.GOOGLE_CLIENT_SECRET, settings.GOOGLE_REDIRECT_URI)

    def authorization_url(self, state=None) -> str:
        if not self.client_id:
            raise OAuthError("GOOGLE_CLIENT_ID is not configured")
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": "openid profile email",
        }
        if state:
            params["state"] = state
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

    async def _exchange(self, client: httpx.AsyncClient, code: str) -> OAuthProfile:
        token_response = await client.post(
            GOOGLE_TOKEN_URL,
            data={
                "code": code,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "redirect_uri": self.redirect_uri,
                "grant_type": "authorization_code",
            },
        )
        token_response.raise_for_status()
        access_token = token_response.json().get("access_token")
        if not access_token:
            raise OAuthError("Token endpoint returned no access token")

        info_response = await client.get(
            GOOGLE_USERINFO_URL, headers={"Authorization": f"Bearer {access_token}"}
        )
        info_response.raise_for_status()
        info = info_response.json()
        return OAuthProfile(
            id=str(info["sub"]),
            displayName=info.get("name") or info.get("email") or "player",
            email=info.get("email"),
            email_verified=info.get("email_verified") in (True, "true"),
            photo=info.get("picture"),
        )

    async def authenticate(self, code: str) -> OAuthProfile:
        if not code:
            raise OAuthError("Missing authorization code")
        try:
            if self._client is not None:
                return await self._exchange(self._client, code)
            async with httpx.AsyncClient() as client:
                return await self._exchange(client, code)
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.error("Google token exchange failed: %s", e)
            raise OAuthError(str(e)) from e
