"""MongoDB index management for the users collection.

Indexes are declared once and reconciled at app startup: an existing index
that clashes with a declared one (same name with other keys, or same keys
under another name) is dropped and rebuilt.
"""

from logging import getLogger

from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

logger = getLogger(__name__)

# Error text MongoDB uses for IndexOptionsConflict / IndexKeySpecsConflict
_CONFLICT_MARKERS = ("already exists", "Conflict")


def create_index_safe(collection: Collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing a conflicting one if necessary.

    Returns False when a conflict was reported but no clashing index could be
    found. Errors other than conflicts are re-raised.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if not any(marker in str(e) for marker in _CONFLICT_MARKERS):
            raise

    clashing = _find_clashing_index(collection, dict(keys), name)
    if clashing is None:
        logger.error("Failed to resolve index conflict", extra={"index": name})
        return False

    logger.warning("Dropping conflicting index", extra={"index": clashing, "replacement": name})
    collection.drop_index(clashing)
    collection.create_index(keys, name=name, **kwargs)
    logger.info("Recreated index", extra={"index": name})
    return True


def _find_clashing_index(collection: Collection, wanted_keys: dict, name: str) -> str | None:
    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue
        same_name = idx_name == name
        same_keys = dict(idx_info.get('key', [])) == wanted_keys
        if same_name != same_keys:
            return idx_name
    return None


def ensure_all_indexes(db: Database) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.user_repository import MongoUserRepository

    return MongoUserRepository(db).ensure_indexes()
