"""MongoDB implementation of UserRepository."""

from logging import getLogger
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.user import User
from port.user_repository import DuplicateUserError, UserStoreError

logger = getLogger(__name__)


class MongoUserRepository:
    """Users keyed by email; the unique email index backs up the signup duplicate check."""

    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('registered_at', -1)], 'idx_users_registered_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            email=doc['email'],
            external_id=doc['external_id'],
            user_name=doc['user_name'],
            registered_at=doc['registered_at'],
            updated_at=doc['updated_at'],
        )

    def _to_document(self, user: User) -> dict:
        return {
            '_id': user.email,
            'email': user.email,
            'external_id': user.external_id,
            'user_name': user.user_name,
            'registered_at': user.registered_at,
            'updated_at': user.updated_at,
        }

    def add(self, user: User) -> None:
        """Insert a new user document."""
        try:
            self.collection.insert_one(self._to_document(user))
        except DuplicateKeyError as e:
            logger.warning("User creation failed: email already exists", extra={"email": user.email})
            raise DuplicateUserError(f"User already exists: {user.email}") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": user.email, "error": str(e)})
            raise UserStoreError("Failed to create user") from e

        logger.info("User created", extra={"email": user.email})

    def find(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise UserStoreError("Failed to get user by email") from e

        if doc is None:
            return None
        return self._to_domain(doc)
