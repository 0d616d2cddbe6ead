"""Google ID token verification for federated sign-in."""

import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx
from jose import JWTError, jwt

from mindbloom.config import get_settings

logger = logging.getLogger(__name__)

GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")
JWKS_CACHE_SECONDS = 3600


class FederatedAuthNotConfigured(Exception):
    """Raised when Google sign-in is attempted without a configured client id."""


class InvalidFederatedToken(Exception):
    """Raised when a Google ID token cannot be trusted."""


@dataclass
class GoogleIdentity:
    """Claims taken from a verified Google ID token."""

    email: str
    name: str | None
    picture: str | None


class GoogleTokenVerifier:
    """Verifies Google-issued ID tokens against Google's published keys."""

    def __init__(self, client_id: str | None, certs_url: str, timeout: float = 5.0) -> None:
        self.client_id = client_id
        self.certs_url = certs_url
        self.timeout = timeout
        self._jwks: dict[str, Any] | None = None
        self._jwks_fetched_at = 0.0

    async def _get_jwks(self) -> dict[str, Any]:
        """Fetch Google's signing keys, cached for an hour."""
        if self._jwks is not None and time.monotonic() - self._jwks_fetched_at < JWKS_CACHE_SECONDS:
            return self._jwks

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(self.certs_url)
            response.raise_for_status()
            self._jwks = response.json()
            self._jwks_fetched_at = time.monotonic()
        return self._jwks

    async def verify(self, id_token: str) -> GoogleIdentity:
        """Verify signature, audience, issuer and expiry, then extract the identity.

        Raises:
            FederatedAuthNotConfigured: no Google client id is configured
            InvalidFederatedToken: the token fails any check or lacks a verified email
        """
        if not self.client_id:
            raise FederatedAuthNotConfigured("Google sign-in is not configured")

        try:
            jwks = await self._get_jwks()
        except httpx.HTTPError as e:
            logger.error(f"Could not fetch Google signing keys: {e}")
            raise InvalidFederatedToken("Unable to verify Google token") from e

        try:
            claims = jwt.decode(
                id_token,
                jwks,
                algorithms=["RS256"],
                audience=self.client_id,
                issuer=GOOGLE_ISSUERS,
                options={"verify_at_hash": False},
            )
        except JWTError as e:
            logger.warning(f"Rejected Google ID token: {e}")
            raise InvalidFederatedToken("Invalid Google token") from e

        email = claims.get("email")
        if not email:
            logger.warning("Google token has no email claim")
            raise InvalidFederatedToken("Google token has no email")

        # Google sends a bool, but older tokens used the string "true"
        email_verified = claims.get("email_verified")
        if email_verified not in (True, "true"):
            raise InvalidFederatedToken("Google email is not verified")

        return GoogleIdentity(
            email=email,
            name=claims.get("name") or claims.get("given_name"),
            picture=claims.get("picture"),
        )


_verifier: GoogleTokenVerifier | None = None


def get_google_verifier() -> GoogleTokenVerifier:
    """Get the shared verifier so the key cache survives across requests."""
    global _verifier
    if _verifier is None:
        settings = get_settings()
        _verifier = GoogleTokenVerifier(settings.google_client_id, settings.google_certs_url)
    return _verifier
