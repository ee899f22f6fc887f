"""Fixed batch of books inserted by ``seed_books.py``.

Mix of classic and modern science fiction, plus a couple of dystopian and
gothic titles. Genre totals: Science Fiction 7, Dystopian 2, Gothic Fiction 1.
"""

from __future__ import annotations

from .models import Book

SEED_BOOKS: tuple[Book, ...] = (
    Book(
        title="Dune",
        author="Frank Herbert",
        genre="Science Fiction",
        published_year=1965,
        price=15.99,
        in_stock=True,
        pages=412,
        publisher="Chilton Books",
    ),
    Book(
        title="Foundation",
        author="Isaac Asimov",
        genre="Science Fiction",
        published_year=1951,
        price=11.49,
        in_stock=True,
        pages=255,
        publisher="Gnome Press",
    ),
    Book(
        title="Do Androids Dream of Electric Sheep?",
        author="Philip K. Dick",
        genre="Science Fiction",
        published_year=1968,
        price=12.99,
        in_stock=True,
        pages=210,
        publisher="Doubleday",
    ),
    Book(
        title="Frankenstein",
        author="Mary Shelley",
        genre="Gothic Fiction",
        published_year=1818,
        price=8.99,
        in_stock=True,
        pages=280,
        publisher="Lackington, Hughes, Harding, Mavor & Jones",
    ),
    Book(
        title="The Martian",
        author="Andy Weir",
        genre="Science Fiction",
        published_year=2011,
        price=14.99,
        in_stock=False,
        pages=369,
        publisher="Crown Publishing",
    ),
    Book(
        title="Ready Player One",
        author="Ernest Cline",
        genre="Science Fiction",
        published_year=2011,
        price=13.50,
        in_stock=True,
        pages=374,
        publisher="Random House",
    ),
    Book(
        title="The Time Machine",
        author="H.G. Wells",
        genre="Science Fiction",
        published_year=1895,
        price=7.99,
        in_stock=True,
        pages=118,
        publisher="William Heinemann",
    ),
    Book(
        title="Fahrenheit 451",
        author="Ray Bradbury",
        genre="Dystopian",
        published_year=1953,
        price=10.99,
        in_stock=True,
        pages=249,
        publisher="Ballantine Books",
    ),
    Book(
        title="The Handmaid's Tale",
        author="Margaret Atwood",
        genre="Dystopian",
        published_year=1985,
        price=12.49,
        in_stock=False,
        pages=311,
        publisher="McClelland & Stewart",
    ),
    Book(
        title="Hyperion",
        author="Dan Simmons",
        genre="Science Fiction",
        published_year=1989,
        price=16.99,
        in_stock=True,
        pages=482,
        publisher="Doubleday",
    ),
)
