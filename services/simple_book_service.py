"""
Book-only management: plain reads and writes on books with no publisher
checks. Only the isbn uniqueness rule applies here.
"""
from __future__ import annotations

import logging
from typing import Iterable, List

from models.book import Book
from models.book_detail import BookDetail
from models.schemas.book import PlainBookOutSchema
from services.base import CatalogService
from services.book_service import BOOK_FIELDS, detail_fields
from services.exceptions import NotFoundError, duplicate_isbn
from utils.decorators import unit_of_work

logger = logging.getLogger(__name__)

plain_schema = PlainBookOutSchema()
plain_list_schema = PlainBookOutSchema(many=True)


def _build_book(row: dict) -> Book:
    book = Book(**{field: row.get(field) for field in BOOK_FIELDS})
    if row.get("detail") is not None:
        book.detail = BookDetail(**detail_fields(row["detail"]))
    return book


class SimpleBookService(CatalogService):

    def count_books(self) -> int:
        return self.storage.count(Book)

    def get_all_books(self) -> List[dict]:
        return plain_list_schema.dump(self.books.find_all())

    def get_book_by_id(self, book_id: str) -> dict:
        book = self.books.find_by_id(book_id)
        if book is None:
            raise NotFoundError("Book", "id", book_id)
        return plain_schema.dump(book)

    def get_book_by_isbn(self, isbn: str) -> dict:
        book = self.books.find_by_isbn(isbn)
        if book is None:
            raise NotFoundError("Book", "isbn", isbn)
        return plain_schema.dump(book)

    def get_books_by_author(self, author: str) -> List[dict]:
        return plain_list_schema.dump(self.books.find_by_author_contains(author))

    @unit_of_work
    def create_book(self, data: dict) -> dict:
        isbn = data["isbn"]
        if self.books.exists_by_isbn(isbn):
            logger.warning("Rejected book create: isbn %s already exists", isbn)
            raise duplicate_isbn(isbn)
        book = _build_book(data)
        self.storage.new(book)
        self._commit(unique=("isbn", duplicate_isbn(isbn)))
        logger.info("Created book %s (isbn %s)", book.id, isbn)
        return plain_schema.dump(book)

    @unit_of_work
    def create_books(self, rows: Iterable[dict]) -> List[dict]:
        """
        Insert several books in one transaction. Rows may carry a ``detail``
        mapping. A repeated isbn, inside the batch or against the store,
        rejects the whole batch.
        """
        books = []
        seen = set()
        for row in rows:
            isbn = row["isbn"]
            if isbn in seen or self.books.exists_by_isbn(isbn):
                logger.warning("Rejected book batch: isbn %s already exists", isbn)
                raise duplicate_isbn(isbn)
            seen.add(isbn)
            books.append(_build_book(row))

        for book in books:
            self.storage.new(book)
        self._commit(unique=("isbn", duplicate_isbn(", ".join(sorted(seen)))))
        logger.info("Created %d books", len(books))
        return plain_list_schema.dump(books)

    @unit_of_work
    def update_book(self, book_id: str, data: dict) -> dict:
        """Partial update: only the fields present in ``data`` change."""
        book = self.books.find_by_id(book_id)
        if book is None:
            raise NotFoundError("Book", "id", book_id)

        if "isbn" in data and data["isbn"] != book.isbn:
            if self.books.exists_by_isbn(data["isbn"]):
                logger.warning("Rejected update of book %s: isbn %s already exists", book_id, data["isbn"])
                raise duplicate_isbn(data["isbn"])

        for field in BOOK_FIELDS:
            if field in data:
                setattr(book, field, data[field])
        self._commit(unique=("isbn", duplicate_isbn(book.isbn)))
        logger.info("Updated book %s", book_id)
        return plain_schema.dump(book)

    @unit_of_work
    def delete_book(self, book_id: str) -> None:
        book = self.books.find_by_id(book_id)
        if book is None:
            raise NotFoundError("Book", "id", book_id)
        self.storage.delete(book)
        self._commit()
        logger.info("Deleted book %s", book_id)
