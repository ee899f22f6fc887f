"""Integration tests for MongoDB seeding and queries.

These tests validate:
1. Seeding an empty collection adds exactly ten books
2. Re-fetched books match what was submitted
3. The genre summary sums to the total count
4. Seeding twice duplicates every title (no uniqueness is enforced)
5. An unreachable server inserts nothing and cleans up quietly
6. The documented queries and indexes behave against real data

Requirements:
- MongoDB must be running (default mongodb://localhost:27017, or MONGO_URI)
- Each test uses its own throwaway database, dropped afterwards
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Generator
from typing import Any

import pytest

from scripts.seed_books import seed_and_report
from scripts.validate_seed import run_validation
from src.catalog import SEED_BOOKS, Book, GenreCount, MongoSettings
from src.catalog import queries

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")


def mongo_available() -> bool:
    """Check if MongoDB is available for testing."""
    try:
        from pymongo import MongoClient
        from pymongo.errors import PyMongoError

        client = MongoClient(MONGO_URI, serverSelectionTimeoutMS=1000)
        try:
            client.admin.command("ping")
        finally:
            client.close()
        return True
    except PyMongoError:
        return False


# Skip all tests if MongoDB is not available
pytestmark = [
    pytest.mark.integration,
    pytest.mark.requires_mongo,
    pytest.mark.skipif(
        not mongo_available(),
        reason="MongoDB not available - start mongod on localhost:27017 first",
    ),
]


@pytest.fixture
def settings(mongo_connection_params: dict[str, Any]) -> Generator[MongoSettings, None, None]:
    """Settings pointing at a unique throwaway database."""
    from pymongo import MongoClient

    settings = MongoSettings(
        uri=mongo_connection_params["uri"],
        database=f"plp_bookstore_test_{uuid.uuid4().hex[:8]}",
        collection="books",
        timeout_ms=mongo_connection_params["timeout_ms"],
    )
    yield settings

    client = MongoClient(settings.uri)
    client.drop_database(settings.database)
    client.close()


@pytest.fixture
def collection(settings: MongoSettings) -> Generator[Any, None, None]:
    from pymongo import MongoClient

    client = MongoClient(settings.uri)
    yield client[settings.database][settings.collection]
    client.close()


class TestSeedAndReport:
    """Tests for the seed-and-report routine against a live server."""

    def test_empty_collection_gains_ten_books(
        self, settings: MongoSettings, collection: Any
    ) -> None:
        assert collection.count_documents({}) == 0

        stats = seed_and_report(settings)

        assert stats.succeeded, stats.error
        assert stats.inserted_count == 10
        assert stats.total_count == 10
        assert collection.count_documents({}) == 10

    def test_refetched_books_match_submitted(
        self, settings: MongoSettings, collection: Any
    ) -> None:
        stats = seed_and_report(settings)

        for _id, book in zip(stats.inserted_ids, SEED_BOOKS):
            stored = collection.find_one({"_id": _id})
            assert Book.from_document(stored) == book

    def test_listing_is_in_insertion_order(self, settings: MongoSettings) -> None:
        stats = seed_and_report(settings)

        assert [b["title"] for b in stats.inserted_books] == [b.title for b in SEED_BOOKS]

    def test_genre_breakdown(self, settings: MongoSettings) -> None:
        stats = seed_and_report(settings)

        assert sum(g.count for g in stats.genres) == stats.total_count
        assert stats.genres == [
            GenreCount("Science Fiction", 7),
            GenreCount("Dystopian", 2),
            GenreCount("Gothic Fiction", 1),
        ]

    def test_second_run_duplicates_titles(
        self, settings: MongoSettings, collection: Any
    ) -> None:
        """No uniqueness constraint: a rerun doubles every title."""
        seed_and_report(settings)
        stats = seed_and_report(settings)

        assert stats.total_count == 20
        for book in SEED_BOOKS:
            assert collection.count_documents({"title": book.title}) == 2

    def test_unreachable_server_inserts_nothing(
        self, settings: MongoSettings, collection: Any
    ) -> None:
        unreachable = MongoSettings(
            uri="mongodb://127.0.0.1:1",
            database=settings.database,
            collection=settings.collection,
            timeout_ms=200,
        )

        stats = seed_and_report(unreachable)

        assert not stats.succeeded
        assert stats.connection_closed
        assert collection.count_documents({}) == 0

    def test_seed_validates(self, settings: MongoSettings, collection: Any) -> None:
        seed_and_report(settings)

        report = run_validation(collection)

        assert report.all_passed, report.failures


class TestQueries:
    """Tests for documented queries against seeded data."""

    @pytest.fixture(autouse=True)
    def seeded(self, settings: MongoSettings) -> None:
        seed_and_report(settings)

    def test_find_by_genre(self, collection: Any) -> None:
        assert len(queries.find_by_genre(collection, "Dystopian")) == 2

    def test_find_published_before(self, collection: Any) -> None:
        titles = {b["title"] for b in queries.find_published_before(collection, 1900)}
        assert titles == {"Frankenstein", "The Time Machine"}

    def test_find_by_author(self, collection: Any) -> None:
        books = queries.find_by_author(collection, "Isaac Asimov")
        assert [b["title"] for b in books] == ["Foundation"]

    def test_in_stock_after_2010(self, collection: Any) -> None:
        books = queries.find_in_stock_published_after(collection, 2010)
        assert books == [{"title": "Ready Player One", "author": "Ernest Cline", "price": 13.50}]

    def test_sorted_by_price(self, collection: Any) -> None:
        cheapest = queries.sorted_by_price(collection)
        priciest = queries.sorted_by_price(collection, descending=True)
        assert cheapest[0]["title"] == "The Time Machine"
        assert priciest[0]["title"] == "Hyperion"

    def test_pagination_covers_all_books(self, collection: Any) -> None:
        page_1 = queries.paginate(collection, 1)
        page_2 = queries.paginate(collection, 2)
        page_3 = queries.paginate(collection, 3)

        assert len(page_1) == 5
        assert len(page_2) == 5
        assert page_3 == []
        titles = [b["title"] for b in page_1 + page_2]
        assert titles == sorted(b.title for b in SEED_BOOKS)

    def test_average_price_by_genre(self, collection: Any) -> None:
        rows = {r.genre: r.average_price for r in queries.average_price_by_genre(collection)}
        assert rows["Dystopian"] == pytest.approx((10.99 + 12.49) / 2)
        assert rows["Gothic Fiction"] == pytest.approx(8.99)

    def test_count_by_decade(self, collection: Any) -> None:
        rows = {r.decade: r.count for r in queries.count_by_decade(collection)}
        assert rows[2010] == 2
        assert rows[1960] == 2
        assert sum(rows.values()) == 10

    def test_update_and_delete(self, collection: Any) -> None:
        assert queries.update_price(collection, "The Martian", 16.99) == 1
        assert queries.set_in_stock(collection, "The Martian") == 1
        martian = collection.find_one({"title": "The Martian"})
        assert martian["price"] == 16.99
        assert martian["in_stock"] is True

        assert queries.delete_by_title(collection, "Fahrenheit 451") == 1
        assert collection.count_documents({}) == 9

    def test_title_lookup_uses_index(self, collection: Any) -> None:
        queries.create_indexes(collection)

        plan = collection.find({"title": "The Martian"}).explain()
        assert "IXSCAN" in str(plan["queryPlanner"]["winningPlan"])
