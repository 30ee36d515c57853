# domain/model/authentication.py

"""Authentication value objects and outcome types.

Login and signup end in exactly one named situation. Each situation is its
own frozen dataclass so that only the variants that carry a user can hold one.
Business failures are returned as these values, never raised.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from domain.model.user import User


EMAIL_IS_EMPTY_DESCRIPTION = "Email is empty."


class LoginSituation(str, Enum):
    """Wire names of the login outcomes."""
    SUCCEEDED = 'Succeeded'
    NOT_REGISTERED = 'NotRegistered'
    VERIFICATION_FAILED = 'VerificationFailed'
    EMAIL_IS_EMPTY = 'EmailIsEmpty'


class SignupSituation(str, Enum):
    """Wire names of the signup outcomes."""
    SUCCEEDED = 'Succeeded'
    ALREADY_REGISTERED = 'AlreadyRegistered'
    VERIFICATION_FAILED = 'VerificationFailed'
    EMAIL_IS_EMPTY = 'EmailIsEmpty'
    USER_NAME_IS_EMPTY = 'UserNameIsEmpty'


# ── Value Objects ────────────────────────────────────────


@dataclass(frozen=True)
class VerifiedIdentity:
    """Claims extracted from a successfully verified credential."""
    external_id: str
    email: str | None = None


@dataclass(frozen=True)
class SignupRequest:
    """Signup input. An empty user_name is valid input that gets rejected."""
    credential: str
    user_name: str


# ── Login outcomes ───────────────────────────────────────


@dataclass(frozen=True)
class LoginSucceeded:
    user: User
    situation: ClassVar[LoginSituation] = LoginSituation.SUCCEEDED

    @property
    def description(self) -> str | None:
        return None


@dataclass(frozen=True)
class LoginNotRegistered:
    situation: ClassVar[LoginSituation] = LoginSituation.NOT_REGISTERED

    @property
    def description(self) -> str | None:
        return None


@dataclass(frozen=True)
class LoginVerificationFailed:
    reason: str
    situation: ClassVar[LoginSituation] = LoginSituation.VERIFICATION_FAILED

    @property
    def description(self) -> str | None:
        return self.reason


@dataclass(frozen=True)
class LoginEmailIsEmpty:
    situation: ClassVar[LoginSituation] = LoginSituation.EMAIL_IS_EMPTY

    @property
    def description(self) -> str | None:
        return EMAIL_IS_EMPTY_DESCRIPTION


LoginOutcome = Union[
    LoginSucceeded,
    LoginNotRegistered,
    LoginVerificationFailed,
    LoginEmailIsEmpty,
]


# ── Signup outcomes ──────────────────────────────────────


@dataclass(frozen=True)
class SignupSucceeded:
    user: User
    situation: ClassVar[SignupSituation] = SignupSituation.SUCCEEDED

    @property
    def description(self) -> str | None:
        return None


@dataclass(frozen=True)
class SignupAlreadyRegistered:
    user: User
    situation: ClassVar[SignupSituation] = SignupSituation.ALREADY_REGISTERED

    @property
    def description(self) -> str | None:
        return None


@dataclass(frozen=True)
class SignupVerificationFailed:
    reason: str
    situation: ClassVar[SignupSituation] = SignupSituation.VERIFICATION_FAILED

    @property
    def description(self) -> str | None:
        return self.reason


@dataclass(frozen=True)
class SignupEmailIsEmpty:
    situation: ClassVar[SignupSituation] = SignupSituation.EMAIL_IS_EMPTY

    @property
    def description(self) -> str | None:
        return None


@dataclass(frozen=True)
class SignupUserNameIsEmpty:
    situation: ClassVar[SignupSituation] = SignupSituation.USER_NAME_IS_EMPTY

    @property
    def description(self) -> str | None:
        return None


SignupOutcome = Union[
    SignupSucceeded,
    SignupAlreadyRegistered,
    SignupVerificationFailed,
    SignupEmailIsEmpty,
    SignupUserNameIsEmpty,
]
