"""MongoDB connection settings and client factory."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

if TYPE_CHECKING:
    from pymongo import MongoClient
    from pymongo.collection import Collection

logger = logging.getLogger(__name__)

# Per S1192: String literals extracted to constants
DEFAULT_MONGO_URI = "mongodb://localhost:27017"
DEFAULT_DATABASE = "plp_bookstore"
DEFAULT_COLLECTION = "books"
DEFAULT_TIMEOUT_MS = 5000


@dataclass
class MongoSettings:
    """Where the books live.

    Per Issue #2.2: Use dataclass instead of long parameter lists.
    """

    uri: str = DEFAULT_MONGO_URI
    database: str = DEFAULT_DATABASE
    collection: str = DEFAULT_COLLECTION
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @classmethod
    def from_env(cls) -> MongoSettings:
        """Build settings from ``.env`` and the process environment.

        Unset variables fall back to the local defaults, so a bare run
        targets ``mongodb://localhost:27017`` / ``plp_bookstore.books``.
        """
        load_dotenv()

        return cls(
            uri=os.getenv("MONGO_URI", DEFAULT_MONGO_URI),
            database=os.getenv("MONGO_DB", DEFAULT_DATABASE),
            collection=os.getenv("MONGO_COLLECTION", DEFAULT_COLLECTION),
            timeout_ms=int(os.getenv("MONGO_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS))),
        )


def get_mongo_client(settings: MongoSettings) -> MongoClient:
    """Create a MongoClient for the configured URI.

    The driver connects lazily; call :func:`ping` to force a round trip.
    """
    from pymongo import MongoClient

    logger.debug(f"Creating MongoDB client for {settings.uri}")
    return MongoClient(settings.uri, serverSelectionTimeoutMS=settings.timeout_ms)


def ping(client: MongoClient) -> dict[str, Any]:
    """Verify the server is reachable.

    Raises:
        pymongo.errors.ConnectionFailure: if no server answers in time.
    """
    return client.admin.command("ping")


def get_collection(client: MongoClient, settings: MongoSettings) -> Collection:
    """Return the configured collection."""
    return client[settings.database][settings.collection]
