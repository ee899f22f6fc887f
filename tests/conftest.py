"""Pytest configuration and fixtures for plp-bookstore."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def schemas_dir(project_root: Path) -> Path:
    """Return the schemas directory."""
    return project_root / "schemas"


@pytest.fixture
def scripts_dir(project_root: Path) -> Path:
    """Return the scripts directory."""
    return project_root / "scripts"


@pytest.fixture
def book_schema(schemas_dir: Path) -> dict[str, Any]:
    """Load the book document schema."""
    schema_path = schemas_dir / "book.schema.json"
    if not schema_path.exists():
        pytest.fail(f"Schema file does not exist: {schema_path}")
    with open(schema_path, encoding="utf-8") as f:
        return json.load(f)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_book_document() -> dict[str, Any]:
    """Return a stored book document for testing."""
    return {
        "title": "I, Robot",
        "author": "Isaac Asimov",
        "genre": "Science Fiction",
        "published_year": 1950,
        "price": 9.99,
        "in_stock": True,
        "pages": 253,
        "publisher": "Gnome Press",
    }


@pytest.fixture
def mock_collection() -> MagicMock:
    """Return a MagicMock standing in for a pymongo Collection."""
    collection = MagicMock(name="books")
    collection.aggregate.return_value = []
    collection.count_documents.return_value = 0
    return collection


# ============================================================================
# Database Fixtures (for integration tests)
# ============================================================================


@pytest.fixture
def mongo_connection_params() -> dict[str, Any]:
    """Return MongoDB connection parameters for testing."""
    return {
        "uri": os.getenv("MONGO_URI", "mongodb://localhost:27017"),
        "timeout_ms": 2000,
    }


# ============================================================================
# Markers
# ============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (deselect with '-m \"not integration\"')",
    )
    config.addinivalue_line(
        "markers",
        "requires_mongo: marks tests requiring a MongoDB connection",
    )
