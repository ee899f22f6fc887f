"""Bookstore catalog - models, seed batch, connection, and queries."""

from .connection import (
    MongoSettings,
    get_collection,
    get_mongo_client,
    ping,
)
from .models import AuthorCount, Book, DecadeCount, GenreCount, GenrePrice
from .seed_data import SEED_BOOKS

__all__ = [
    "AuthorCount",
    "Book",
    "DecadeCount",
    "GenreCount",
    "GenrePrice",
    "MongoSettings",
    "SEED_BOOKS",
    "get_collection",
    "get_mongo_client",
    "ping",
]
