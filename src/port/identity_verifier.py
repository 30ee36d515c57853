"""Identity verifier port — outbound interface for the identity provider."""

from typing import Protocol

from domain.model.authentication import VerifiedIdentity


class IdentityVerificationError(Exception):
    """Credential was rejected or could not be checked.

    Covers bad signatures, expiry, wrong audience and provider network
    failures alike. str(error) is the human-readable reason.
    """


class IdentityVerifier(Protocol):
    """Port for verifying an opaque credential against an identity provider."""

    async def verify(self, credential: str) -> VerifiedIdentity:
        """Return the verified identity or raise IdentityVerificationError."""
        ...
