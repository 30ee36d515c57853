"""In-memory implementation of IdentityVerifier for testing."""

from domain.model.authentication import VerifiedIdentity
from port.identity_verifier import IdentityVerificationError

UNKNOWN_CREDENTIAL_REASON = "unknown credential"


class FakeIdentityVerifier:
    """Resolves credentials from a preset table.

    Register accepted credentials with accept() and rejected ones with
    reject(). Every verify() call is recorded in `calls`.
    """

    def __init__(self):
        self._identities: dict[str, VerifiedIdentity] = {}
        self._failures: dict[str, str] = {}
        self.calls: list[str] = []

    def accept(self, credential: str, external_id: str, email: str | None = None) -> None:
        self._failures.pop(credential, None)
        self._identities[credential] = VerifiedIdentity(external_id=external_id, email=email)

    def reject(self, credential: str, reason: str) -> None:
        self._identities.pop(credential, None)
        self._failures[credential] = reason

    async def verify(self, credential: str) -> VerifiedIdentity:
        self.calls.append(credential)

        if credential in self._failures:
            raise IdentityVerificationError(self._failures[credential])
        identity = self._identities.get(credential)
        if identity is None:
            raise IdentityVerificationError(UNKNOWN_CREDENTIAL_REASON)
        return identity
