"""Process-wide MongoDB client.

The client is created lazily on first use and reused while it answers a ping.
A client that stops answering is replaced on the next call. A missing URL or a
failed first connection is treated as a configuration problem: it is logged
once and the service keeps running without a database until restarted.
"""

import os
import logging
from dataclasses import dataclass

from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# Keep driver-level chatter out of the structured logs
logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'effort_visualizer')
USERS_COLLECTION_NAME = 'users'

# Short selection/connect timeouts so a request fails fast when the DB is down
CLIENT_OPTIONS = {
    'serverSelectionTimeoutMS': 5000,
    'connectTimeoutMS': 5000,
    'socketTimeoutMS': 30000,
    'maxPoolSize': 10,
    'minPoolSize': 0,
    'maxIdleTimeMS': 30000,
    'waitQueueTimeoutMS': 10000,
    'retryWrites': True,
    'retryReads': True,
}


@dataclass
class _ClientState:
    client: MongoClient | None = None
    connected_once: bool = False
    unavailable: bool = False


_state = _ClientState()


def reset_client() -> None:
    """Forget the cached client and any earlier configuration failure."""
    global _state
    _state = _ClientState()


def _answers_ping(client: MongoClient) -> bool:
    try:
        client.admin.command('ping')
        return True
    except PyMongoError:
        return False


def _connect(url: str) -> MongoClient:
    """Open a client and confirm the server is reachable; raises PyMongoError."""
    client = MongoClient(url, **CLIENT_OPTIONS)
    client.admin.command('ping')
    return client


def get_mongodb_client() -> MongoClient | None:
    """Return a healthy shared client, or None when MongoDB is unavailable."""
    if _state.client is not None:
        if _answers_ping(_state.client):
            return _state.client
        logger.warning("MongoDB client stopped answering, reconnecting", extra={"database": DATABASE_NAME})
        _state.client = None

    if _state.unavailable:
        return None

    if not MONGO_URL:
        logger.error("MONGO_URL is not configured; running without a database")
        _state.unavailable = True
        return None

    try:
        client = _connect(MONGO_URL)
    except PyMongoError as e:
        if _state.connected_once:
            # Lost an established connection; the next call tries again
            logger.warning("MongoDB reconnection failed", extra={"error": str(e)[:200]})
        else:
            logger.error("Initial MongoDB connection failed", extra={"error": str(e)[:200]})
            _state.unavailable = True
        return None

    if not _state.connected_once:
        logger.info("Connected to MongoDB", extra={"database": DATABASE_NAME})
    _state.client = client
    _state.connected_once = True
    return client
