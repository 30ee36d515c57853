"""Authentication service — login and signup business logic.

Login flow:  verify credential → check email → find user
Signup flow: check user name → verify credential → check email → find user → add user

Pure business logic with no HTTP dependencies. Repository calls are blocking
I/O and run in worker threads so concurrent requests keep progressing.
Every business situation is returned as an outcome value; UserStoreError
from the repository propagates to the caller as an infrastructure fault.
"""

import asyncio
import logging

from domain.model.authentication import (
    LoginEmailIsEmpty,
    LoginNotRegistered,
    LoginOutcome,
    LoginSucceeded,
    LoginVerificationFailed,
    SignupAlreadyRegistered,
    SignupEmailIsEmpty,
    SignupOutcome,
    SignupRequest,
    SignupSucceeded,
    SignupUserNameIsEmpty,
    SignupVerificationFailed,
)
from domain.model.user import User
from port.identity_verifier import IdentityVerificationError, IdentityVerifier
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AuthenticationService:
    """Turns a raw credential into a login or signup outcome.

    Holds references to a process-wide verifier and repository; keeps no
    state of its own between calls.
    """

    def __init__(self, verifier: IdentityVerifier, repo: UserRepository):
        self.verifier = verifier
        self.repo = repo

    async def login(self, credential: str) -> LoginOutcome:
        try:
            identity = await self.verifier.verify(credential)
        except IdentityVerificationError as e:
            logger.warning("Login verification failed", extra={"reason": str(e)})
            return LoginVerificationFailed(reason=str(e))

        if not identity.email:
            logger.info("Login rejected: email is empty", extra={"externalId": identity.external_id})
            return LoginEmailIsEmpty()

        user = await asyncio.to_thread(self.repo.find, identity.email)
        if user is None:
            logger.info("Login rejected: not registered", extra={"email": identity.email})
            return LoginNotRegistered()

        logger.info("Login succeeded", extra={"email": user.email})
        return LoginSucceeded(user=user)

    async def signup(self, request: SignupRequest) -> SignupOutcome:
        # Local validation runs before any provider or store traffic
        if not request.user_name:
            return SignupUserNameIsEmpty()

        try:
            identity = await self.verifier.verify(request.credential)
        except IdentityVerificationError as e:
            logger.warning("Signup verification failed", extra={"reason": str(e)})
            return SignupVerificationFailed(reason=str(e))

        if not identity.email:
            logger.info("Signup rejected: email is empty", extra={"externalId": identity.external_id})
            return SignupEmailIsEmpty()

        existing = await asyncio.to_thread(self.repo.find, identity.email)
        if existing is not None:
            logger.info("Signup skipped: already registered", extra={"email": existing.email})
            return SignupAlreadyRegistered(user=existing)

        user = User.register(
            email=identity.email,
            external_id=identity.external_id,
            user_name=request.user_name,
        )
        await asyncio.to_thread(self.repo.add, user)

        logger.info("User signed up", extra={"email": user.email, "externalId": user.external_id})
        return SignupSucceeded(user=user)
