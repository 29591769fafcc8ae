from __future__ import annotations

import logging
from typing import List

from sqlalchemy.exc import IntegrityError

from models.publisher import Publisher
from models.schemas.book import BookSummarySchema
from models.schemas.publisher import PublisherSummarySchema, PublisherOutSchema
from services.base import CatalogService
from services.exceptions import NotFoundError, duplicate_publisher_name, publisher_has_books
from utils.decorators import unit_of_work

logger = logging.getLogger(__name__)

PUBLISHER_FIELDS = ("name", "established_date", "address")

summary_schema = PublisherSummarySchema()
out_schema = PublisherOutSchema()
book_summaries_schema = BookSummarySchema(many=True)


class PublisherService(CatalogService):

    def _snapshot(self, publisher: Publisher) -> dict:
        """Publisher with its books, looked up rather than held as a collection."""
        books = self.books.find_by_publisher_id(publisher.id)
        data = out_schema.dump(publisher)
        data["book_count"] = len(books)
        data["books"] = book_summaries_schema.dump(books)
        return data

    def get_all_publishers(self) -> List[dict]:
        """
        Publisher summaries, each with a book count from its own count query
        so no book rows are loaded for the listing.
        """
        result = []
        for publisher in self.publishers.find_all():
            data = summary_schema.dump(publisher)
            data["book_count"] = self.books.count_by_publisher_id(publisher.id)
            result.append(data)
        return result

    def get_publisher_by_id(self, publisher_id: str) -> dict:
        publisher = self.publishers.find_by_id(publisher_id)
        if publisher is None:
            raise NotFoundError("Publisher", "id", publisher_id)
        return self._snapshot(publisher)

    def get_publisher_by_name(self, name: str) -> dict:
        publisher = self.publishers.find_by_name(name)
        if publisher is None:
            raise NotFoundError("Publisher", "name", name)
        return self._snapshot(publisher)

    @unit_of_work
    def create_publisher(self, data: dict) -> dict:
        name = data["name"]
        if self.publishers.exists_by_name(name):
            logger.warning("Rejected publisher create: name %r already exists", name)
            raise duplicate_publisher_name(name)

        publisher = Publisher(**{field: data.get(field) for field in PUBLISHER_FIELDS})
        self.storage.new(publisher)
        self._commit(unique=("name", duplicate_publisher_name(name)))
        logger.info("Created publisher %s (%s)", publisher.id, name)
        return self._snapshot(publisher)

    @unit_of_work
    def update_publisher(self, publisher_id: str, data: dict) -> dict:
        publisher = self.publishers.find_by_id(publisher_id)
        if publisher is None:
            raise NotFoundError("Publisher", "id", publisher_id)

        name = data["name"]
        if name != publisher.name and self.publishers.exists_by_name(name):
            logger.warning("Rejected update of publisher %s: name %r already exists", publisher_id, name)
            raise duplicate_publisher_name(name)

        for field in PUBLISHER_FIELDS:
            setattr(publisher, field, data.get(field))
        self._commit(unique=("name", duplicate_publisher_name(name)))
        logger.info("Updated publisher %s", publisher_id)
        return self._snapshot(publisher)

    @unit_of_work
    def delete_publisher(self, publisher_id: str) -> None:
        publisher = self.publishers.find_by_id(publisher_id)
        if publisher is None:
            raise NotFoundError("Publisher", "id", publisher_id)

        book_count = self.books.count_by_publisher_id(publisher_id)
        if book_count > 0:
            logger.warning("Rejected delete of publisher %s: %d book(s) attached", publisher_id, book_count)
            raise publisher_has_books(publisher_id, book_count)

        self.storage.delete(publisher)
        try:
            self._commit()
        except IntegrityError as err:
            # A book was attached after the count; ON DELETE RESTRICT stopped us
            if "foreign key" not in str(getattr(err, "orig", err)).lower():
                raise
            raise publisher_has_books(publisher_id, self.books.count_by_publisher_id(publisher_id)) from err
        logger.info("Deleted publisher %s", publisher_id)
