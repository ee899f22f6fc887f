"""Data models for the bookstore catalog."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any


@dataclass(frozen=True)
class Book:
    """A single book document in the ``books`` collection.

    Field names match the stored document keys.
    """

    title: str
    author: str
    genre: str
    published_year: int
    price: float
    in_stock: bool
    pages: int
    publisher: str

    def to_document(self) -> dict[str, Any]:
        """Convert to a MongoDB document (without ``_id``)."""
        return asdict(self)

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> Book:
        """Create a Book from a stored document, ignoring ``_id`` and extras."""
        return cls(**{f.name: data[f.name] for f in fields(cls)})


@dataclass
class GenreCount:
    """One row of the genre summary aggregation."""

    genre: str
    count: int

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> GenreCount:
        return cls(genre=data["_id"], count=data["count"])


@dataclass
class GenrePrice:
    """Average price for a genre."""

    genre: str
    average_price: float

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> GenrePrice:
        return cls(genre=data["_id"], average_price=data["averagePrice"])


@dataclass
class AuthorCount:
    """Number of books by an author."""

    author: str
    book_count: int

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> AuthorCount:
        return cls(author=data["_id"], book_count=data["bookCount"])


@dataclass
class DecadeCount:
    """Number of books published in a decade (e.g. 1960 for 1960-1969)."""

    decade: int
    count: int

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> DecadeCount:
        return cls(decade=int(data["_id"]), count=data["count"])

    @property
    def label(self) -> str:
        return f"{self.decade}s"
