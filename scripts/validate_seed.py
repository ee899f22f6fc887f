"""Validate the bookstore seed.

This script validates:
1. Every starter book title is present in the collection
2. The genre summary adds up to the total book count
3. Stored documents conform to schemas/book.schema.json
4. The title and author/published_year indexes exist (informational)

Anti-Pattern Audit:
- Per Issue #12: Connection pooling (single client instance)
- Per Category 1.1: All functions have type annotations
- Per S1192: String literals extracted to constants
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import click
from pymongo.errors import PyMongoError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.catalog import SEED_BOOKS, Book, MongoSettings
from src.catalog.connection import get_collection, get_mongo_client
from src.catalog.queries import AUTHOR_YEAR_INDEX, TITLE_INDEX, genre_summary
from src.validators.validate import load_schema, validate_documents

if TYPE_CHECKING:
    from pymongo import MongoClient
    from pymongo.collection import Collection

console = Console()

# Keys pymongo reports in index_information()["..."]["key"]
EXPECTED_INDEXES: dict[str, list[tuple[str, int]]] = {
    "title": TITLE_INDEX,
    "author + published_year": AUTHOR_YEAR_INDEX,
}


@dataclass
class ValidationResult:
    """Result of a validation check."""

    name: str
    expected: int | None
    actual: int
    passed: bool
    message: str = ""


@dataclass
class ValidationReport:
    """Complete validation report."""

    books: list[ValidationResult] = field(default_factory=list)
    summary: list[ValidationResult] = field(default_factory=list)
    schema: list[ValidationResult] = field(default_factory=list)
    indexes: list[ValidationResult] = field(default_factory=list)

    @property
    def all_passed(self) -> bool:
        """Check if all required validations passed. Indexes are optional."""
        return all(r.passed for r in self.books + self.summary + self.schema)

    @property
    def failures(self) -> list[ValidationResult]:
        """Get all failed required validations."""
        return [r for r in self.books + self.summary + self.schema if not r.passed]


def validate_seed_titles(
    collection: Collection,
    expected: Sequence[Book] = SEED_BOOKS,
) -> list[ValidationResult]:
    """Check each starter title has at least one stored copy."""
    results = []

    for book in expected:
        count = collection.count_documents({"title": book.title})
        results.append(ValidationResult(
            name=book.title,
            expected=1,
            actual=count,
            passed=count >= 1,
            message="" if count >= 1 else "Missing from collection",
        ))

    return results


def validate_genre_totals(collection: Collection) -> ValidationResult:
    """Genre counts must sum to the collection's document count."""
    total = collection.count_documents({})
    genre_total = sum(g.count for g in genre_summary(collection))
    passed = genre_total == total

    return ValidationResult(
        name="Genre summary total",
        expected=total,
        actual=genre_total,
        passed=passed,
        message="" if passed else f"Genres sum to {genre_total}, collection has {total}",
    )


def validate_schema(collection: Collection, schema: dict[str, Any]) -> ValidationResult:
    """Check every stored document against the book schema."""
    invalid = validate_documents(collection.find({}), schema)
    message = ""
    if invalid:
        first_key, first_errors = next(iter(invalid.items()))
        message = f"{len(invalid)} invalid, e.g. {first_key}: {first_errors[0]}"

    return ValidationResult(
        name="Book schema",
        expected=0,
        actual=len(invalid),
        passed=not invalid,
        message=message,
    )


def validate_indexes(collection: Collection) -> list[ValidationResult]:
    """Report whether the documented indexes exist."""
    existing_keys = [info["key"] for info in collection.index_information().values()]
    results = []

    for name, keys in EXPECTED_INDEXES.items():
        exists = any(list(k) == list(keys) for k in existing_keys)
        results.append(ValidationResult(
            name=f"Index: {name}",
            expected=1,
            actual=1 if exists else 0,
            passed=exists,
            message="" if exists else "Run 'query-books create-indexes'",
        ))

    return results


def run_validation(
    collection: Collection,
    expected: Sequence[Book] = SEED_BOOKS,
    schema: dict[str, Any] | None = None,
) -> ValidationReport:
    """Run all checks against ``collection`` and return the report."""
    report = ValidationReport()

    report.books = validate_seed_titles(collection, expected)
    report.summary.append(validate_genre_totals(collection))
    report.schema.append(validate_schema(collection, schema or load_schema()))
    report.indexes = validate_indexes(collection)

    return report


def _render_table(title: str, results: Sequence[ValidationResult], fail_color: str = "red") -> None:
    table = Table(title=title)
    table.add_column("Check", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Status", justify="center")

    for result in results:
        status = "✓" if result.passed else "✗"
        color = "green" if result.passed else fail_color
        status_text = f"[{color}]{status}[/{color}]"
        if result.message:
            status_text += f" {escape(result.message)}"
        table.add_row(escape(result.name), str(result.actual), status_text)

    console.print(table)
    console.print()


@click.command()
@click.option("--uri", type=str, default=None, help="MongoDB connection URI (env: MONGO_URI)")
@click.option("--database", type=str, default=None, help="Database name (env: MONGO_DB)")
@click.option("--collection", type=str, default=None, help="Collection name (env: MONGO_COLLECTION)")
def main(uri: str | None, database: str | None, collection: str | None) -> None:
    """Validate bookstore seed integrity."""
    settings = MongoSettings.from_env()
    if uri:
        settings.uri = uri
    if database:
        settings.database = database
    if collection:
        settings.collection = collection

    console.print(
        f"\n[bold blue]Validating {settings.database}.{settings.collection}...[/bold blue]\n"
    )

    client: MongoClient | None = None
    try:
        client = get_mongo_client(settings)
        report = run_validation(get_collection(client, settings))
    except PyMongoError as e:
        raise click.ClickException(f"Validation failed: {e}") from e
    finally:
        if client is not None:
            client.close()

    _render_table("Starter Books", report.books)
    _render_table("Genre Summary", report.summary)
    _render_table("Schema", report.schema)
    _render_table("Indexes", report.indexes, fail_color="yellow")

    if report.all_passed:
        console.print("[bold green]✓ All validations passed![/bold green]\n")
    else:
        console.print("[bold yellow]⚠ Some validations failed:[/bold yellow]")
        for failure in report.failures:
            console.print(f"  - {escape(failure.name)}: {escape(failure.message or 'Failed')}")
        console.print()
        raise SystemExit(1)


if __name__ == "__main__":
    main()
