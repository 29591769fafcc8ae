from __future__ import annotations

import models
from sqlalchemy.exc import IntegrityError

from models.repository import BookRepository, BookDetailRepository, PublisherRepository
from services.exceptions import ConflictError


class CatalogService:
    """
    Common plumbing for the catalog services: a storage handle, repositories
    bound to the current session, and a commit that turns unique-index
    violations into the same ConflictError the pre-checks raise.
    """

    def __init__(self, store=None):
        self.storage = store or models.storage

    @property
    def session(self):
        return self.storage.get_session()

    @property
    def books(self) -> BookRepository:
        return BookRepository(self.session)

    @property
    def publishers(self) -> PublisherRepository:
        return PublisherRepository(self.session)

    @property
    def book_details(self) -> BookDetailRepository:
        return BookDetailRepository(self.session)

    def _commit(self, unique: tuple[str, ConflictError] | None = None):
        """
        Commit the session. ``unique`` is ``(column, error)``: when the store
        rejects the write with a unique violation mentioning ``column``,
        ``error`` is raised instead of the driver's IntegrityError.
        """
        try:
            self.storage.save()
        except IntegrityError as err:
            message = str(getattr(err, "orig", err)).lower()
            if unique and "unique" in message and unique[0] in message:
                raise unique[1] from err
            raise
