from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class User:
    """Domain model representing a registered account."""
    email: str
    external_id: str
    user_name: str
    registered_at: datetime
    updated_at: datetime

    @classmethod
    def register(cls, email: str, external_id: str, user_name: str) -> "User":
        """Create a new user stamped with the current UTC time."""
        now = datetime.now(timezone.utc)
        return cls(
            email=email,
            external_id=external_id,
            user_name=user_name,
            registered_at=now,
            updated_at=now,
        )
