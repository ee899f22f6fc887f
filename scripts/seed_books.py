"""Seed MongoDB with the bookstore's starter books and print a summary.

This script:
1. Connects to MongoDB (verified with a ping)
2. Inserts the fixed batch of ten books into ``plp_bookstore.books``
3. Lists the newly inserted books in insertion order
4. Prints the total book count and a per-genre summary
5. Always closes the connection, even after a failure

Nothing is deduplicated: running it twice inserts every book twice.

Anti-Pattern Audit:
- Per Issue #12: Single client instance for the whole run
- Per Issue #9-11: No race conditions (single-threaded seeding)
- Per Category 1.1: All functions have type annotations
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import click
from pymongo.errors import PyMongoError
from rich.console import Console
from rich.markup import escape

from src.catalog import SEED_BOOKS, Book, GenreCount, MongoSettings
from src.catalog.connection import get_collection, get_mongo_client, ping
from src.catalog.queries import genre_summary

if TYPE_CHECKING:
    from bson import ObjectId
    from pymongo import MongoClient
    from pymongo.collection import Collection

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


@dataclass
class SeedingStats:
    """Outcome of a seeding run."""

    inserted_ids: list[ObjectId] = field(default_factory=list)
    inserted_books: list[dict[str, Any]] = field(default_factory=list)
    total_count: int | None = None
    genres: list[GenreCount] = field(default_factory=list)
    error: PyMongoError | None = None
    connection_closed: bool = False

    @property
    def inserted_count(self) -> int:
        return len(self.inserted_ids)

    @property
    def succeeded(self) -> bool:
        return self.error is None


def insert_books(collection: Collection, books: Sequence[Book]) -> list[ObjectId]:
    """Insert all books in one ``insert_many`` call.

    Returns:
        Generated ``_id`` values in submission order
    """
    result = collection.insert_many([book.to_document() for book in books])
    return list(result.inserted_ids)


def fetch_inserted(collection: Collection, ids: Sequence[ObjectId]) -> list[dict[str, Any]]:
    """Re-read books by ``_id``, ordered the same way as ``ids``.

    ``$in`` gives no ordering guarantee, so results are re-sorted here.
    """
    documents = {doc["_id"]: doc for doc in collection.find({"_id": {"$in": list(ids)}})}
    return [documents[_id] for _id in ids if _id in documents]


def count_books(collection: Collection) -> int:
    return collection.count_documents({})


def print_inserted(books: Sequence[dict[str, Any]]) -> None:
    console.print("\n[cyan]Newly Inserted Books:[/cyan]")
    for index, book in enumerate(books, start=1):
        title = escape(str(book.get("title")))
        author = escape(str(book.get("author")))
        console.print(f'[cyan]{index}. "{title}" by {author} ({book.get("published_year")})[/cyan]')


def print_summary(total: int, genres: Sequence[GenreCount]) -> None:
    console.print(f"\n[magenta]Total books in collection: {total}[/magenta]")
    console.print("[magenta]Genre Summary:[/magenta]")
    for genre in genres:
        console.print(f"[magenta]- {escape(str(genre.genre))}: {genre.count} book(s)[/magenta]")


def seed_and_report(
    settings: MongoSettings,
    books: Sequence[Book] = SEED_BOOKS,
) -> SeedingStats:
    """Insert ``books`` and print what ended up in the collection.

    Any database error is reported on stderr and recorded on the returned
    stats; it is not re-raised. The client is closed in every case.
    """
    stats = SeedingStats()
    client: MongoClient | None = None

    try:
        client = get_mongo_client(settings)
        ping(client)
        console.print("[green]Connected to MongoDB server[/green]")

        collection = get_collection(client, settings)

        stats.inserted_ids = insert_books(collection, books)
        console.print(
            f"[green]{stats.inserted_count} books were successfully inserted into the database[/green]"
        )

        stats.inserted_books = fetch_inserted(collection, stats.inserted_ids)
        print_inserted(stats.inserted_books)

        stats.total_count = count_books(collection)
        stats.genres = genre_summary(collection)
        print_summary(stats.total_count, stats.genres)

    except PyMongoError as e:
        stats.error = e
        err_console.print(f"[red]Error occurred:[/red] {escape(str(e))}")
        logger.error(f"Seeding {settings.database}.{settings.collection} failed: {e}")

    finally:
        if client is not None:
            client.close()
            stats.connection_closed = True
            console.print("[green]Connection closed[/green]")

    return stats


@click.command()
@click.option("--uri", type=str, default=None, help="MongoDB connection URI (env: MONGO_URI)")
@click.option("--database", type=str, default=None, help="Database name (env: MONGO_DB)")
@click.option("--collection", type=str, default=None, help="Collection name (env: MONGO_COLLECTION)")
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
def main(
    uri: str | None,
    database: str | None,
    collection: str | None,
    verbose: bool,
) -> None:
    """Insert the starter books into MongoDB and print a summary."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    settings = MongoSettings.from_env()
    if uri:
        settings.uri = uri
    if database:
        settings.database = database
    if collection:
        settings.collection = collection

    seed_and_report(settings)


if __name__ == "__main__":
    main()
