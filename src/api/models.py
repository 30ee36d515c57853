"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from domain.model.authentication import LoginSituation, SignupSituation
from domain.model.user import User


class LoginRequest(BaseModel):
    """Request model for login: the credential returned by Google Sign-In."""
    credential: str = Field(..., description="Google ID token")


class SignupRequest(BaseModel):
    """Request model for signup."""
    token: LoginRequest
    user_name: str = Field(..., description="Display name; must not be empty")


class UserResponse(BaseModel):
    """Response model for a registered user."""
    email: str
    external_id: str
    user_name: str
    registered_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            email=user.email,
            external_id=user.external_id,
            user_name=user.user_name,
            registered_at=user.registered_at,
            updated_at=user.updated_at,
        )


class LoginResult(BaseModel):
    """Response model for login."""
    situation: LoginSituation
    login_user: Optional[UserResponse] = None
    description: Optional[str] = None
    token: Optional[str] = Field(None, description="Session token, set only when login succeeded")


class SignupResult(BaseModel):
    """Response model for signup."""
    situation: SignupSituation
    login_user: Optional[UserResponse] = None
    description: Optional[str] = None
    token: Optional[str] = Field(None, description="Session token, set only when signup succeeded")
