"""Google Sign-In adapter.

Implements IdentityVerifier by checking Google ID tokens locally against
Google's published signing keys (JWK set). Keys are cached for the lifetime
Google advertises in the Cache-Control header.

Token checks: RS256 signature, audience (our OAuth client id), issuer, expiry.
Every failure is reported as IdentityVerificationError.
"""

import logging
import re
import time
from typing import Any

import httpx
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from domain.model.authentication import VerifiedIdentity
from port.identity_verifier import IdentityVerificationError

logger = logging.getLogger(__name__)

GOOGLE_CERTS_URL = "https://www.googleapis.com/oauth2/v3/certs"
GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")
ID_TOKEN_ALGORITHMS = ["RS256"]
API_TIMEOUT_SECONDS = 5.0
DEFAULT_CERTS_MAX_AGE_SECONDS = 3600

_MAX_AGE_PATTERN = re.compile(r"max-age=(\d+)")


def _cache_max_age(cache_control: str | None) -> int:
    """Seconds to keep the key set, from a Cache-Control header value."""
    if not cache_control:
        return DEFAULT_CERTS_MAX_AGE_SECONDS
    match = _MAX_AGE_PATTERN.search(cache_control)
    if not match:
        return DEFAULT_CERTS_MAX_AGE_SECONDS
    return int(match.group(1))


def _normalize_email(claims: dict[str, Any]) -> str | None:
    """Lower-cased email claim, or None when absent or unverified."""
    email = (claims.get("email") or "").strip().lower()
    if not email:
        return None
    # Google sends a bool; older tokens used the string "false"
    if str(claims.get("email_verified", True)).lower() == "false":
        logger.warning("Ignoring unverified email claim", extra={"externalId": claims.get("sub")})
        return None
    return email


class GoogleIdentityVerifier:
    """Verifies Google ID tokens issued for a single OAuth client id."""

    def __init__(
        self,
        client_id: str,
        certs_url: str = GOOGLE_CERTS_URL,
        timeout: float = API_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not client_id:
            raise ValueError("Google client id is required to verify ID tokens")
        self.client_id = client_id
        self.certs_url = certs_url
        self.timeout = timeout
        self._transport = transport
        self._jwks: dict[str, Any] | None = None
        self._jwks_expires_at = 0.0

    async def verify(self, credential: str) -> VerifiedIdentity:
        jwks = await self._get_jwks()

        try:
            claims = jwt.decode(
                credential,
                jwks,
                algorithms=ID_TOKEN_ALGORITHMS,
                audience=self.client_id,
                issuer=GOOGLE_ISSUERS,
                options={"verify_at_hash": False},
            )
        except ExpiredSignatureError as e:
            raise IdentityVerificationError("Token has expired") from e
        except JWTClaimsError as e:
            raise IdentityVerificationError(f"Invalid token claims: {e}") from e
        except JWTError as e:
            raise IdentityVerificationError(f"Token verification failed: {e}") from e

        subject = claims.get("sub")
        if not subject:
            raise IdentityVerificationError("Token has no subject")

        return VerifiedIdentity(external_id=str(subject), email=_normalize_email(claims))

    async def _get_jwks(self) -> dict[str, Any]:
        """Return Google's signing keys, refetching once the cached set expires."""
        if self._jwks is not None and time.monotonic() < self._jwks_expires_at:
            return self._jwks

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.certs_url)
                response.raise_for_status()
                jwks = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Failed to fetch Google signing keys", extra={"url": self.certs_url, "error": str(e)})
            raise IdentityVerificationError("Failed to fetch Google signing keys") from e

        max_age = _cache_max_age(response.headers.get("cache-control"))
        self._jwks = jwks
        self._jwks_expires_at = time.monotonic() + max_age
        logger.debug("Fetched Google signing keys", extra={"keyCount": len(jwks.get("keys", [])), "maxAge": max_age})
        return jwks
