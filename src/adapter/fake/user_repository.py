"""In-memory implementation of UserRepository for testing."""

from domain.model.user import User
from port.user_repository import DuplicateUserError


class FakeUserRepository:
    def __init__(self, users: list[User] | None = None):
        self.store: dict[str, User] = {u.email: u for u in users or []}
        self.added: list[User] = []

    # ── write operations ─────────────────────────────────────

    def add(self, user: User) -> None:
        if user.email in self.store:
            raise DuplicateUserError(f"User already exists: {user.email}")

        self.store[user.email] = user
        self.added.append(user)

    # ── read operations ──────────────────────────────────────

    def find(self, email: str) -> User | None:
        return self.store.get(email)
