"""
Query layer over the catalog tables.

Repositories wrap a SQLAlchemy session and return ORM objects, ``None`` or
plain lists. They never raise for a missing row; deciding whether absence is
an error belongs to the service layer.

Association loading is always explicit: the ``*_with_detail_and_publisher``
variants and ``find_all`` use outer-join eager loading so the returned books
are complete snapshots whether or not a detail or publisher exists.
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import joinedload

from models.book import Book
from models.book_detail import BookDetail
from models.publisher import Publisher


def _with_associations(stmt):
    return stmt.options(joinedload(Book.detail), joinedload(Book.publisher))


class BookRepository:
    def __init__(self, session):
        self.session = session

    def find_all(self) -> List[Book]:
        stmt = _with_associations(select(Book)).order_by(Book.title)
        return list(self.session.scalars(stmt).unique())

    def find_by_id(self, book_id: str) -> Optional[Book]:
        return self.session.get(Book, book_id)

    def find_by_isbn(self, isbn: str) -> Optional[Book]:
        return self.session.scalars(select(Book).where(Book.isbn == isbn)).first()

    def find_by_id_with_detail_and_publisher(self, book_id: str) -> Optional[Book]:
        stmt = _with_associations(select(Book)).where(Book.id == book_id)
        return self.session.scalars(stmt).unique().first()

    def find_by_isbn_with_detail_and_publisher(self, isbn: str) -> Optional[Book]:
        stmt = _with_associations(select(Book)).where(Book.isbn == isbn)
        return self.session.scalars(stmt).unique().first()

    def find_by_author_contains(self, author: str) -> List[Book]:
        """Books whose author contains ``author``, ignoring case."""
        stmt = (
            _with_associations(select(Book))
            .where(Book.author.icontains(author, autoescape=True))
            .order_by(Book.title)
        )
        return list(self.session.scalars(stmt).unique())

    def find_by_title_contains(self, title: str) -> List[Book]:
        """Books whose title contains ``title``, ignoring case."""
        stmt = (
            _with_associations(select(Book))
            .where(Book.title.icontains(title, autoescape=True))
            .order_by(Book.title)
        )
        return list(self.session.scalars(stmt).unique())

    def find_by_publisher_id(self, publisher_id: str) -> List[Book]:
        # Unknown publisher ids simply match nothing
        stmt = (
            _with_associations(select(Book))
            .where(Book.publisher_id == publisher_id)
            .order_by(Book.title)
        )
        return list(self.session.scalars(stmt).unique())

    def count_by_publisher_id(self, publisher_id: str) -> int:
        stmt = select(func.count(Book.id)).where(Book.publisher_id == publisher_id)
        return self.session.scalar(stmt) or 0

    def exists_by_isbn(self, isbn: str) -> bool:
        return self.session.scalar(select(select(Book.id).where(Book.isbn == isbn).exists()))


class PublisherRepository:
    def __init__(self, session):
        self.session = session

    def find_all(self) -> List[Publisher]:
        return list(self.session.scalars(select(Publisher).order_by(Publisher.name)))

    def find_by_id(self, publisher_id: str) -> Optional[Publisher]:
        return self.session.get(Publisher, publisher_id)

    def find_by_name(self, name: str) -> Optional[Publisher]:
        return self.session.scalars(select(Publisher).where(Publisher.name == name)).first()

    def exists_by_id(self, publisher_id: str) -> bool:
        return self.session.scalar(select(select(Publisher.id).where(Publisher.id == publisher_id).exists()))

    def exists_by_name(self, name: str) -> bool:
        return self.session.scalar(select(select(Publisher.id).where(Publisher.name == name).exists()))


class BookDetailRepository:
    def __init__(self, session):
        self.session = session

    def find_by_id(self, detail_id: str) -> Optional[BookDetail]:
        stmt = select(BookDetail).options(joinedload(BookDetail.book)).where(BookDetail.id == detail_id)
        return self.session.scalars(stmt).first()

    def find_by_book_id(self, book_id: str) -> Optional[BookDetail]:
        return self.session.scalars(select(BookDetail).where(BookDetail.book_id == book_id)).first()

    def find_by_publisher(self, imprint: str) -> List[BookDetail]:
        """Details whose printed imprint equals ``imprint`` exactly."""
        stmt = (
            select(BookDetail)
            .options(joinedload(BookDetail.book))
            .where(BookDetail.publisher == imprint)
        )
        return list(self.session.scalars(stmt))
