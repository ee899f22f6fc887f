"""Run everyday queries against the bookstore collection.

Examples:
    query-books genre "Science Fiction"
    query-books in-stock-after 2010
    query-books by-price --desc
    query-books page 2
    query-books avg-price
    query-books update-price "The Martian" 16.99
    query-books create-indexes
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

import click
from pymongo.errors import PyMongoError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.catalog import Book, MongoSettings
from src.catalog import queries
from src.catalog.connection import get_collection, get_mongo_client

if TYPE_CHECKING:
    from pymongo import MongoClient
    from pymongo.collection import Collection

console = Console()
logger = logging.getLogger(__name__)

BOOK_COLUMNS = ("title", "author", "genre", "published_year", "price", "in_stock")
SUMMARY_COLUMNS = ("title", "author", "price")


def run_query(ctx: click.Context, func: Callable[[Collection], Any]) -> Any:
    """Open a client, run ``func`` against the collection, always close."""
    settings: MongoSettings = ctx.obj
    client: MongoClient | None = None
    try:
        client = get_mongo_client(settings)
        return func(get_collection(client, settings))
    except PyMongoError as e:
        raise click.ClickException(f"Query failed: {e}") from e
    finally:
        if client is not None:
            client.close()


def print_books(title: str, books: Sequence[dict[str, Any]], columns: Sequence[str]) -> None:
    if not books:
        console.print(f"[yellow]{escape(title)}: no books found[/yellow]")
        return

    table = Table(title=title)
    for column in columns:
        table.add_column(column, style="cyan" if column == "title" else None)
    for book in books:
        table.add_row(*(escape(str(book.get(column, ""))) for column in columns))

    console.print(table)


@click.group()
@click.option("--uri", type=str, default=None, help="MongoDB connection URI (env: MONGO_URI)")
@click.option("--database", type=str, default=None, help="Database name (env: MONGO_DB)")
@click.option("--collection", type=str, default=None, help="Collection name (env: MONGO_COLLECTION)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(
    ctx: click.Context,
    uri: str | None,
    database: str | None,
    collection: str | None,
    verbose: bool,
) -> None:
    """Query the bookstore collection."""
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
    ctx.obj = settings


# =============================================================================
# Reads
# =============================================================================


@main.command()
@click.argument("genre")
@click.pass_context
def genre(ctx: click.Context, genre: str) -> None:
    """Find all books in GENRE."""
    books = run_query(ctx, lambda c: queries.find_by_genre(c, genre))
    print_books(f"Genre: {genre}", books, BOOK_COLUMNS)


@main.command()
@click.argument("year", type=int)
@click.pass_context
def after(ctx: click.Context, year: int) -> None:
    """Find books published after YEAR."""
    books = run_query(ctx, lambda c: queries.find_published_after(c, year))
    print_books(f"Published after {year}", books, BOOK_COLUMNS)


@main.command()
@click.argument("year", type=int)
@click.pass_context
def before(ctx: click.Context, year: int) -> None:
    """Find books published before YEAR."""
    books = run_query(ctx, lambda c: queries.find_published_before(c, year))
    print_books(f"Published before {year}", books, BOOK_COLUMNS)


@main.command()
@click.argument("name")
@click.pass_context
def author(ctx: click.Context, name: str) -> None:
    """Find books by author NAME."""
    books = run_query(ctx, lambda c: queries.find_by_author(c, name))
    print_books(f"Author: {name}", books, BOOK_COLUMNS)


@main.command("in-stock-after")
@click.argument("year", type=int)
@click.pass_context
def in_stock_after(ctx: click.Context, year: int) -> None:
    """In-stock books published after YEAR."""
    books = run_query(ctx, lambda c: queries.find_in_stock_published_after(c, year))
    print_books(f"In stock, published after {year}", books, SUMMARY_COLUMNS)


@main.command("by-price")
@click.option("--desc", is_flag=True, help="Most expensive first")
@click.pass_context
def by_price(ctx: click.Context, desc: bool) -> None:
    """List books sorted by price."""
    books = run_query(ctx, lambda c: queries.sorted_by_price(c, descending=desc))
    order = "descending" if desc else "ascending"
    print_books(f"By price ({order})", books, SUMMARY_COLUMNS)


@main.command()
@click.argument("number", type=click.IntRange(min=1))
@click.option(
    "--size",
    type=click.IntRange(min=1),
    default=queries.DEFAULT_PAGE_SIZE,
    show_default=True,
    help="Books per page",
)
@click.pass_context
def page(ctx: click.Context, number: int, size: int) -> None:
    """Show page NUMBER of books sorted by title."""
    books = run_query(ctx, lambda c: queries.paginate(c, number, page_size=size))
    print_books(f"Page {number}", books, SUMMARY_COLUMNS)


# =============================================================================
# Aggregations
# =============================================================================


@main.command("avg-price")
@click.pass_context
def avg_price(ctx: click.Context) -> None:
    """Average price of books by genre."""
    rows = run_query(ctx, queries.average_price_by_genre)

    table = Table(title="Average Price by Genre")
    table.add_column("Genre", style="cyan")
    table.add_column("Average Price", justify="right")
    for row in rows:
        table.add_row(escape(str(row.genre)), f"{row.average_price:.2f}")
    console.print(table)


@main.command("top-author")
@click.pass_context
def top_author(ctx: click.Context) -> None:
    """Author with the most books."""
    result = run_query(ctx, queries.top_author)
    if result is None:
        console.print("[yellow]No books in collection[/yellow]")
        return
    console.print(f"[magenta]{escape(result.author)}: {result.book_count} book(s)[/magenta]")


@main.command()
@click.pass_context
def decades(ctx: click.Context) -> None:
    """Group books by publication decade."""
    rows = run_query(ctx, queries.count_by_decade)

    table = Table(title="Books by Decade")
    table.add_column("Decade", style="cyan")
    table.add_column("Count", justify="right")
    for row in rows:
        table.add_row(row.label, str(row.count))
    console.print(table)


# =============================================================================
# Writes
# =============================================================================


@main.command("add-book")
@click.option("--title", required=True)
@click.option("--author", "author_name", required=True)
@click.option("--genre", "genre_name", required=True)
@click.option("--year", type=int, required=True)
@click.option("--price", type=float, required=True)
@click.option("--pages", type=int, required=True)
@click.option("--publisher", required=True)
@click.option("--in-stock/--out-of-stock", default=True)
@click.pass_context
def add_book(
    ctx: click.Context,
    title: str,
    author_name: str,
    genre_name: str,
    year: int,
    price: float,
    pages: int,
    publisher: str,
    in_stock: bool,
) -> None:
    """Insert a single book."""
    book = Book(
        title=title,
        author=author_name,
        genre=genre_name,
        published_year=year,
        price=price,
        in_stock=in_stock,
        pages=pages,
        publisher=publisher,
    )
    inserted_id = run_query(ctx, lambda c: queries.insert_book(c, book))
    console.print(f"[green]✓ Inserted {escape(repr(title))} ({inserted_id})[/green]")


@main.command("update-price")
@click.argument("title")
@click.argument("price", type=float)
@click.pass_context
def update_price(ctx: click.Context, title: str, price: float) -> None:
    """Set the PRICE of the book titled TITLE."""
    modified = run_query(ctx, lambda c: queries.update_price(c, title, price))
    _report_change(modified, f"Updated price of {title!r} to {price:.2f}", title)


@main.command()
@click.argument("title")
@click.option("--out", is_flag=True, help="Mark as out of stock instead")
@click.pass_context
def restock(ctx: click.Context, title: str, out: bool) -> None:
    """Mark the book titled TITLE as in stock."""
    modified = run_query(ctx, lambda c: queries.set_in_stock(c, title, in_stock=not out))
    state = "out of stock" if out else "in stock"
    _report_change(modified, f"Marked {title!r} {state}", title)


@main.command()
@click.argument("title")
@click.pass_context
def delete(ctx: click.Context, title: str) -> None:
    """Delete the book titled TITLE."""
    deleted = run_query(ctx, lambda c: queries.delete_by_title(c, title))
    _report_change(deleted, f"Deleted {title!r}", title)


@main.command("create-indexes")
@click.pass_context
def create_indexes(ctx: click.Context) -> None:
    """Create the title and author/published_year indexes."""
    names = run_query(ctx, queries.create_indexes)
    for name in names:
        console.print(f"  ✓ Index {name}")


def _report_change(count: int, message: str, title: str) -> None:
    if count:
        console.print(f"[green]✓ {escape(message)}[/green]")
    else:
        console.print(f"[yellow]No change for {escape(repr(title))}[/yellow]")


if __name__ == "__main__":
    main()
