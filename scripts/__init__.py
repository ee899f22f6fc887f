"""Seeding, validation, and query scripts for the bookstore database.

This directory contains database seeding, validation, and query scripts.

## Scripts

| Script | Purpose |
|--------|---------|
| `seed_books.py` | Inserts the ten starter books and prints a summary |
| `validate_seed.py` | Verifies seed integrity (titles, genre totals, schema, indexes) |
| `query_books.py` | Runs everyday CRUD, sorting, pagination, and aggregation queries |

## Usage

```bash
# Seed
poetry run seed-books

# Validation
poetry run validate-seed

# Queries
poetry run query-books genre "Science Fiction"
poetry run query-books page 2
```
"""
