"""
Book operations that keep Book, BookDetail and Publisher consistent.

Every write checks the referenced publisher and the isbn before touching the
session, runs as one unit of work, and returns a response snapshot: the book
with its detail (or None) and a publisher summary carrying the publisher's
live book count.
"""
from __future__ import annotations

import logging
from typing import List

from models.book import Book
from models.book_detail import BookDetail
from models.schemas.book import BookOutSchema, BookDetailOutSchema
from services.base import CatalogService
from services.exceptions import NotFoundError, duplicate_isbn
from utils.decorators import unit_of_work

logger = logging.getLogger(__name__)

BOOK_FIELDS = ("title", "author", "isbn", "price", "publish_date")
DETAIL_FIELDS = ("description", "language", "page_count", "publisher", "cover_image_url", "edition")

book_out_schema = BookOutSchema()
detail_out_schema = BookDetailOutSchema()


def detail_fields(payload: dict) -> dict:
    """Every detail column from ``payload``; absent keys become None."""
    return {field: payload.get(field) for field in DETAIL_FIELDS}


class BookService(CatalogService):

    # Snapshots

    def _snapshot(self, book: Book) -> dict:
        data = book_out_schema.dump(book)
        if data.get("publisher") is not None:
            data["publisher"]["book_count"] = self.books.count_by_publisher_id(book.publisher_id)
        return data

    def _snapshots(self, books: List[Book]) -> List[dict]:
        # One count query per distinct publisher, not per book
        counts = {}
        result = []
        for book in books:
            data = book_out_schema.dump(book)
            if data.get("publisher") is not None:
                if book.publisher_id not in counts:
                    counts[book.publisher_id] = self.books.count_by_publisher_id(book.publisher_id)
                data["publisher"]["book_count"] = counts[book.publisher_id]
            result.append(data)
        return result

    # Lookups

    def get_all_books(self) -> List[dict]:
        return self._snapshots(self.books.find_all())

    def get_book_by_id(self, book_id: str) -> dict:
        book = self.books.find_by_id_with_detail_and_publisher(book_id)
        if book is None:
            raise NotFoundError("Book", "id", book_id)
        return self._snapshot(book)

    def get_book_by_isbn(self, isbn: str) -> dict:
        book = self.books.find_by_isbn_with_detail_and_publisher(isbn)
        if book is None:
            raise NotFoundError("Book", "isbn", isbn)
        return self._snapshot(book)

    def get_books_by_author(self, author: str) -> List[dict]:
        return self._snapshots(self.books.find_by_author_contains(author))

    def get_books_by_title(self, title: str) -> List[dict]:
        return self._snapshots(self.books.find_by_title_contains(title))

    def get_books_by_publisher_id(self, publisher_id: str) -> List[dict]:
        if not self.publishers.exists_by_id(publisher_id):
            raise NotFoundError("Publisher", "id", publisher_id)
        return self._snapshots(self.books.find_by_publisher_id(publisher_id))

    def get_book_detail(self, detail_id: str) -> dict:
        detail = self.book_details.find_by_id(detail_id)
        if detail is None:
            raise NotFoundError("BookDetail", "id", detail_id)
        return detail_out_schema.dump(detail)

    def get_book_details_by_imprint(self, imprint: str) -> List[dict]:
        return detail_out_schema.dump(self.book_details.find_by_publisher(imprint), many=True)

    # Writes

    @unit_of_work
    def create_book(self, data: dict) -> dict:
        publisher = self.publishers.find_by_id(data["publisher_id"])
        if publisher is None:
            raise NotFoundError("Publisher", "id", data["publisher_id"])

        isbn = data["isbn"]
        if self.books.exists_by_isbn(isbn):
            logger.warning("Rejected book create: isbn %s already exists", isbn)
            raise duplicate_isbn(isbn)

        book = Book(**{field: data.get(field) for field in BOOK_FIELDS}, publisher=publisher)
        if data.get("detail") is not None:
            # Linked through the back-reference before the first flush
            book.detail = BookDetail(**detail_fields(data["detail"]))

        self.storage.new(book)
        self._commit(unique=("isbn", duplicate_isbn(isbn)))
        logger.info("Created book %s (isbn %s) under publisher %s", book.id, isbn, publisher.id)
        return self._snapshot(book)

    @unit_of_work
    def update_book(self, book_id: str, data: dict) -> dict:
        """
        Replace every scalar field and the publisher. A ``detail`` payload
        creates the detail or overwrites all of its fields; leaving it out
        keeps the existing detail as it is.
        """
        book = self.books.find_by_id_with_detail_and_publisher(book_id)
        if book is None:
            raise NotFoundError("Book", "id", book_id)

        publisher = self.publishers.find_by_id(data["publisher_id"])
        if publisher is None:
            raise NotFoundError("Publisher", "id", data["publisher_id"])

        isbn = data["isbn"]
        if isbn != book.isbn and self.books.exists_by_isbn(isbn):
            logger.warning("Rejected update of book %s: isbn %s already exists", book_id, isbn)
            raise duplicate_isbn(isbn)

        for field in BOOK_FIELDS:
            setattr(book, field, data.get(field))
        book.publisher = publisher

        if data.get("detail") is not None:
            values = detail_fields(data["detail"])
            if book.detail is None:
                book.detail = BookDetail(**values)
            else:
                for field, value in values.items():
                    setattr(book.detail, field, value)

        self._commit(unique=("isbn", duplicate_isbn(isbn)))
        logger.info("Updated book %s", book_id)
        return self._snapshot(book)

    @unit_of_work
    def delete_book(self, book_id: str) -> None:
        book = self.books.find_by_id(book_id)
        if book is None:
            raise NotFoundError("Book", "id", book_id)
        # The detail goes with it (delete-orphan cascade + ON DELETE CASCADE)
        self.storage.delete(book)
        self._commit()
        logger.info("Deleted book %s", book_id)
