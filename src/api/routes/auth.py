"""Authentication routes (login, signup, me).

Maps authentication outcomes to HTTP statuses:
- Succeeded → 200 with a session token
- NotRegistered / AlreadyRegistered → 202 (client must sign up or log in instead)
- every other situation → 401

UserStoreError is left to the application's exception handler (500).
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_authentication_service
from api.models import (
    LoginRequest,
    LoginResult,
    SignupRequest,
    SignupResult,
    UserResponse,
)
from api.security import create_access_token, get_current_user_required
from domain.model.authentication import (
    LoginNotRegistered,
    LoginSucceeded,
    SignupAlreadyRegistered,
    SignupRequest as SignupCommand,
    SignupSucceeded,
)
from services.authentication_service import AuthenticationService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _respond(result: LoginResult | SignupResult, status_code: int) -> JSONResponse:
    return JSONResponse(content=result.model_dump(mode="json"), status_code=status_code)


@router.post(
    "/login",
    response_model=LoginResult,
    responses={
        status.HTTP_202_ACCEPTED: {"model": LoginResult, "description": "Not registered"},
        status.HTTP_401_UNAUTHORIZED: {"model": LoginResult, "description": "Login failed"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Internal error"},
    },
)
async def login(
    request: LoginRequest,
    service: AuthenticationService = Depends(get_authentication_service),
):
    """Log in with a Google ID token.

    Returns:
        LoginResult with a session token when the user is registered
    """
    outcome = await service.login(request.credential)

    if isinstance(outcome, LoginSucceeded):
        result = LoginResult(
            situation=outcome.situation,
            login_user=UserResponse.from_domain(outcome.user),
            token=create_access_token(outcome.user.email),
        )
        logger.info("User logged in", extra={"email": outcome.user.email})
        return _respond(result, status.HTTP_200_OK)

    result = LoginResult(situation=outcome.situation, description=outcome.description)
    if isinstance(outcome, LoginNotRegistered):
        return _respond(result, status.HTTP_202_ACCEPTED)
    return _respond(result, status.HTTP_401_UNAUTHORIZED)


@router.post(
    "/signup",
    response_model=SignupResult,
    responses={
        status.HTTP_202_ACCEPTED: {"model": SignupResult, "description": "The user is already registered"},
        status.HTTP_401_UNAUTHORIZED: {"model": SignupResult, "description": "Signup failed"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Internal error"},
    },
)
async def signup(
    request: SignupRequest,
    service: AuthenticationService = Depends(get_authentication_service),
):
    """Register a new user from a Google ID token and a display name."""
    outcome = await service.signup(
        SignupCommand(credential=request.token.credential, user_name=request.user_name)
    )

    if isinstance(outcome, SignupSucceeded):
        result = SignupResult(
            situation=outcome.situation,
            login_user=UserResponse.from_domain(outcome.user),
            token=create_access_token(outcome.user.email),
        )
        logger.info("User registered", extra={"email": outcome.user.email})
        return _respond(result, status.HTTP_200_OK)

    if isinstance(outcome, SignupAlreadyRegistered):
        result = SignupResult(
            situation=outcome.situation,
            login_user=UserResponse.from_domain(outcome.user),
        )
        return _respond(result, status.HTTP_202_ACCEPTED)

    result = SignupResult(situation=outcome.situation, description=outcome.description)
    return _respond(result, status.HTTP_401_UNAUTHORIZED)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserResponse = Depends(get_current_user_required)):
    """Get current authenticated user info.

    Raises:
        HTTPException: 401 if not authenticated
    """
    return current_user
