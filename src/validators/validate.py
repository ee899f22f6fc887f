"""JSON schema validation for book documents."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import click
import jsonschema
from rich.console import Console
from rich.markup import escape

console = Console()

DEFAULT_SCHEMA_PATH = Path(__file__).parent.parent.parent / "schemas" / "book.schema.json"


def load_schema(schema_path: Path = DEFAULT_SCHEMA_PATH) -> dict[str, Any]:
    """Load a JSON schema from file."""
    with open(schema_path) as f:
        return json.load(f)


def validate_document(document: Any, schema: dict[str, Any]) -> list[str]:
    """Validate one book document against a schema.

    ``_id`` is dropped first since it is an ObjectId, not JSON. Non-object
    values are passed through so the schema rejects them.

    Returns:
        List of validation errors (empty if valid)
    """
    errors: list[str] = []
    instance = document
    if isinstance(document, dict):
        instance = {k: v for k, v in document.items() if k != "_id"}

    try:
        jsonschema.validate(instance=instance, schema=schema)
    except jsonschema.ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
    except jsonschema.SchemaError as e:
        errors.append(f"Invalid schema: {e.message}")

    return errors


def validate_documents(
    documents: Iterable[Any],
    schema: dict[str, Any],
) -> dict[str, list[str]]:
    """Validate many documents.

    Returns:
        Dict mapping each invalid document to its errors. Documents are keyed
        by ``_id`` when they have one, otherwise by position and title
        (e.g. ``[1] Dune``) so repeated titles stay distinct.
    """
    results: dict[str, list[str]] = {}

    for index, document in enumerate(documents):
        errors = validate_document(document, schema)
        if not errors:
            continue

        if isinstance(document, dict) and "_id" in document:
            key = str(document["_id"])
        elif isinstance(document, dict) and "title" in document:
            key = f"[{index}] {document['title']}"
        else:
            key = f"[{index}]"
        results[key] = errors

    return results


def validate_file(file_path: Path, schema: dict[str, Any]) -> list[str]:
    """Validate a JSON file holding one book or a list of books."""
    try:
        with open(file_path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        return [f"Invalid JSON: {e}"]

    documents = data if isinstance(data, list) else [data]
    results = validate_documents(documents, schema)
    return [f"{key}: {error}" for key, errors in results.items() for error in errors]


@click.command()
@click.argument("file_path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--schema",
    type=click.Path(exists=True, path_type=Path),
    default=DEFAULT_SCHEMA_PATH,
    help="Path to JSON schema",
)
def main(file_path: Path, schema: Path) -> None:
    """Validate a JSON file of books against the book schema."""
    console.print(f"[bold blue]Validating {file_path}...[/bold blue]")

    errors = validate_file(file_path, load_schema(schema))
    if errors:
        console.print("[red]✗ Validation failed[/red]")
        for error in errors:
            console.print(f"    {escape(error)}")
        raise SystemExit(1)

    console.print("[green]✓ Valid[/green]")


if __name__ == "__main__":
    main()
