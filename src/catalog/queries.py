"""Reusable queries against the ``books`` collection.

Covers the everyday operations run after seeding:
1. CRUD: insert, find by genre/author/year, update price or stock, delete
2. Advanced reads: combined filters with projection, price sorting, pagination
3. Aggregations: genre summary, average price by genre, top author, decades
4. Indexes: title and author/published_year

All functions take a pymongo ``Collection`` so they can be exercised with a
mock in unit tests.

Anti-Pattern Audit:
- Per Category 1.1: All functions have type annotations
- Per S1192: Field names and projections extracted to constants
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pymongo import ASCENDING, DESCENDING

from .models import AuthorCount, Book, DecadeCount, GenreCount, GenrePrice

if TYPE_CHECKING:
    from bson import ObjectId
    from pymongo.collection import Collection

logger = logging.getLogger(__name__)

# Per S1192: String literals extracted to constants
FIELD_TITLE = "title"
FIELD_AUTHOR = "author"
FIELD_GENRE = "genre"
FIELD_YEAR = "published_year"
FIELD_PRICE = "price"
FIELD_IN_STOCK = "in_stock"

SUMMARY_PROJECTION: dict[str, int] = {FIELD_TITLE: 1, FIELD_AUTHOR: 1, FIELD_PRICE: 1, "_id": 0}
DEFAULT_PAGE_SIZE = 5

TITLE_INDEX = [(FIELD_TITLE, ASCENDING)]
AUTHOR_YEAR_INDEX = [(FIELD_AUTHOR, ASCENDING), (FIELD_YEAR, DESCENDING)]


# =============================================================================
# CRUD
# =============================================================================


def insert_book(collection: Collection, book: Book) -> ObjectId:
    """Insert a single book and return its generated ``_id``."""
    result = collection.insert_one(book.to_document())
    logger.debug(f"Inserted {book.title!r} as {result.inserted_id}")
    return result.inserted_id


def find_by_genre(collection: Collection, genre: str) -> list[dict[str, Any]]:
    return list(collection.find({FIELD_GENRE: genre}))


def find_published_after(collection: Collection, year: int) -> list[dict[str, Any]]:
    """Books published strictly after ``year``."""
    return list(collection.find({FIELD_YEAR: {"$gt": year}}))


def find_published_before(collection: Collection, year: int) -> list[dict[str, Any]]:
    """Books published strictly before ``year``."""
    return list(collection.find({FIELD_YEAR: {"$lt": year}}))


def find_by_author(collection: Collection, author: str) -> list[dict[str, Any]]:
    return list(collection.find({FIELD_AUTHOR: author}))


def update_price(collection: Collection, title: str, price: float) -> int:
    """Set the price of the first book matching ``title``.

    Returns:
        Number of documents matched (0 or 1). A book already at ``price``
        still counts as matched.
    """
    result = collection.update_one({FIELD_TITLE: title}, {"$set": {FIELD_PRICE: price}})
    return result.matched_count


def set_in_stock(collection: Collection, title: str, in_stock: bool = True) -> int:
    """Set the stock flag of the first book matching ``title``. Returns the matched count."""
    result = collection.update_one({FIELD_TITLE: title}, {"$set": {FIELD_IN_STOCK: in_stock}})
    return result.matched_count


def delete_by_title(collection: Collection, title: str) -> int:
    """Delete the first book matching ``title``. Returns the deleted count."""
    result = collection.delete_one({FIELD_TITLE: title})
    return result.deleted_count


# =============================================================================
# Advanced reads
# =============================================================================


def find_in_stock_published_after(collection: Collection, year: int) -> list[dict[str, Any]]:
    """In-stock books published after ``year``, projected to title/author/price."""
    return list(
        collection.find(
            {FIELD_IN_STOCK: True, FIELD_YEAR: {"$gt": year}},
            SUMMARY_PROJECTION,
        )
    )


def sorted_by_price(collection: Collection, descending: bool = False) -> list[dict[str, Any]]:
    """All books projected to title/author/price, cheapest first by default."""
    direction = DESCENDING if descending else ASCENDING
    return list(collection.find({}, SUMMARY_PROJECTION).sort(FIELD_PRICE, direction))


def paginate(
    collection: Collection,
    page: int,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[dict[str, Any]]:
    """Return one page of books sorted by title.

    Args:
        collection: Books collection
        page: 1-based page number
        page_size: Books per page

    Raises:
        ValueError: If page or page_size is less than 1
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    skip = (page - 1) * page_size
    cursor = collection.find({}, SUMMARY_PROJECTION).sort(FIELD_TITLE, ASCENDING)
    return list(cursor.skip(skip).limit(page_size))


# =============================================================================
# Aggregations
# =============================================================================


def genre_summary(collection: Collection) -> list[GenreCount]:
    """Count books per genre, most common first.

    Ties are broken by genre name so the output is stable.
    """
    pipeline = [
        {"$group": {"_id": f"${FIELD_GENRE}", "count": {"$sum": 1}}},
        {"$sort": {"count": -1, "_id": 1}},
    ]
    return [GenreCount.from_document(doc) for doc in collection.aggregate(pipeline)]


def average_price_by_genre(collection: Collection) -> list[GenrePrice]:
    """Average price per genre, most expensive first."""
    pipeline = [
        {"$group": {"_id": f"${FIELD_GENRE}", "averagePrice": {"$avg": f"${FIELD_PRICE}"}}},
        {"$sort": {"averagePrice": -1}},
    ]
    return [GenrePrice.from_document(doc) for doc in collection.aggregate(pipeline)]


def top_author(collection: Collection) -> AuthorCount | None:
    """Author with the most books, or None for an empty collection."""
    pipeline = [
        {"$group": {"_id": f"${FIELD_AUTHOR}", "bookCount": {"$sum": 1}}},
        {"$sort": {"bookCount": -1, "_id": 1}},
        {"$limit": 1},
    ]
    for doc in collection.aggregate(pipeline):
        return AuthorCount.from_document(doc)
    return None


def count_by_decade(collection: Collection) -> list[DecadeCount]:
    """Group books by publication decade, oldest first."""
    pipeline = [
        {
            "$addFields": {
                "decade": {
                    "$multiply": [{"$floor": {"$divide": [f"${FIELD_YEAR}", 10]}}, 10]
                }
            }
        },
        {"$group": {"_id": "$decade", "count": {"$sum": 1}}},
        {"$sort": {"_id": 1}},
    ]
    return [DecadeCount.from_document(doc) for doc in collection.aggregate(pipeline)]


# =============================================================================
# Indexes
# =============================================================================


def create_indexes(collection: Collection) -> list[str]:
    """Create the title index and the author/published_year compound index.

    ``create_index`` is a no-op when an identical index exists, so this is
    safe to run repeatedly.

    Returns:
        Names of the indexes
    """
    names = [
        collection.create_index(TITLE_INDEX),
        collection.create_index(AUTHOR_YEAR_INDEX),
    ]
    logger.info(f"Ensured indexes: {', '.join(names)}")
    return names
