import os
from functools import lru_cache

from fastapi import Depends, HTTPException

from adapter.external.google_identity import GoogleIdentityVerifier
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from port.identity_verifier import IdentityVerifier
from port.user_repository import UserRepository
from services.authentication_service import AuthenticationService

GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID")


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


@lru_cache(maxsize=1)
def _google_verifier(client_id: str) -> GoogleIdentityVerifier:
    return GoogleIdentityVerifier(client_id=client_id)


def get_identity_verifier() -> IdentityVerifier:
    """Process-wide Google verifier, raising 503 if no client id is configured."""
    if not GOOGLE_CLIENT_ID:
        raise HTTPException(status_code=503, detail="Identity provider unavailable")
    return _google_verifier(GOOGLE_CLIENT_ID)


def get_authentication_service(
    verifier: IdentityVerifier = Depends(get_identity_verifier),
    repo: UserRepository = Depends(get_user_repo),
) -> AuthenticationService:
    return AuthenticationService(verifier=verifier, repo=repo)
