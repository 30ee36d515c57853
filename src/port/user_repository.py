"""User repository port — outbound interface for user persistence."""

from typing import Protocol

from domain.model.user import User


class UserStoreError(Exception):
    """User store could not complete the request (connection, query, write)."""


class DuplicateUserError(UserStoreError):
    """A user with the same email is already stored."""


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Both methods raise UserStoreError on infrastructure failure.
    """

    def find(self, email: str) -> User | None:
        """Find a user by exact email. Return User or None if not found."""
        ...

    def add(self, user: User) -> None:
        """Persist a new user. Raise DuplicateUserError if the email is taken."""
        ...
