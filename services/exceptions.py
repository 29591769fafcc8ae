"""
Domain errors raised by the catalog services.

The HTTP layer maps these to the uniform error envelope in api/errors.py;
nothing in the services catches them.
"""
from __future__ import annotations

DUPLICATE_ISBN = "DUPLICATE_ISBN"
DUPLICATE_PUBLISHER_NAME = "DUPLICATE_PUBLISHER_NAME"
PUBLISHER_HAS_BOOKS = "PUBLISHER_HAS_BOOKS"


class CatalogError(Exception):
    """Base class for every error a catalog service reports."""


class NotFoundError(CatalogError):
    def __init__(self, entity: str, key: str, value):
        self.entity = entity
        self.key = key
        self.value = value
        super().__init__(f"{entity} not found with {key}: {value}")


class ConflictError(CatalogError):
    def __init__(self, reason: str, message: str, payload: dict | None = None):
        self.reason = reason
        self.payload = payload or {}
        super().__init__(message)


def duplicate_isbn(isbn: str) -> ConflictError:
    return ConflictError(DUPLICATE_ISBN, f"ISBN already exists: {isbn}", {"isbn": isbn})


def duplicate_publisher_name(name: str) -> ConflictError:
    return ConflictError(
        DUPLICATE_PUBLISHER_NAME, f"Publisher name already exists: {name}", {"name": name}
    )


def publisher_has_books(publisher_id: str, book_count: int) -> ConflictError:
    return ConflictError(
        PUBLISHER_HAS_BOOKS,
        f"Cannot delete publisher {publisher_id}: it still has {book_count} book(s).",
        {"publisher_id": publisher_id, "book_count": book_count},
    )
