"""Publisher-aware book operations and their consistency rules."""
import pytest

from models import storage
from models.book import Book
from models.book_detail import BookDetail
from models.repository import BookRepository
from services.exceptions import (
    ConflictError,
    NotFoundError,
    DUPLICATE_ISBN,
)

DETAIL = {
    "description": "A handbook of agile software craftsmanship",
    "language": "English",
    "page_count": 464,
    "publisher": "Prentice Hall",
    "cover_image_url": "https://example.com/clean-code.jpg",
    "edition": "1st Edition",
}


def _book_count():
    return storage.count(Book)


class TestCreateBook:

    def test_end_to_end_create_and_fetch(self, book_service, book_payload, acme):
        created = book_service.create_book(book_payload())

        fetched = book_service.get_book_by_id(created["id"])

        assert fetched["title"] == "T"
        assert fetched["isbn"] == "978-0000000000"
        assert fetched["publisher"]["id"] == acme["id"]
        assert fetched["publisher"]["name"] == "Acme"
        assert fetched["publisher"]["book_count"] == 1
        assert fetched["detail"] is None

    def test_create_with_detail(self, book_service, book_payload):
        created = book_service.create_book(book_payload(detail=DETAIL))

        assert created["detail"]["edition"] == "1st Edition"
        assert created["detail"]["publisher"] == "Prentice Hall"
        assert created["detail"]["id"]
        assert storage.count(BookDetail) == 1

    def test_unknown_publisher(self, book_service, book_payload):
        with pytest.raises(NotFoundError) as exc:
            book_service.create_book(book_payload(publisher_id="missing"))
        assert (exc.value.entity, exc.value.key, exc.value.value) == ("Publisher", "id", "missing")
        assert _book_count() == 0

    def test_duplicate_isbn(self, book_service, book_payload):
        book_service.create_book(book_payload(isbn="111"))

        with pytest.raises(ConflictError) as exc:
            book_service.create_book(book_payload(isbn="111", title="Other", detail=DETAIL))

        assert exc.value.reason == DUPLICATE_ISBN
        assert exc.value.payload == {"isbn": "111"}
        assert BookRepository(storage.get_session()).find_by_isbn("111").title == "T"
        assert _book_count() == 1
        # The rejected detail was never written either
        assert storage.count(BookDetail) == 0

    def test_lost_precheck_race_still_reports_duplicate(self, book_service, book_payload, monkeypatch):
        book_service.create_book(book_payload(isbn="111"))
        # Simulate a concurrent writer inserting between the check and the commit
        monkeypatch.setattr(BookRepository, "exists_by_isbn", lambda self, isbn: False)

        with pytest.raises(ConflictError) as exc:
            book_service.create_book(book_payload(isbn="111"))

        assert exc.value.reason == DUPLICATE_ISBN
        assert _book_count() == 1


class TestUpdateBook:

    def test_overwrites_scalars_and_publisher(self, book_service, publisher_service, book_payload):
        created = book_service.create_book(book_payload(price=100))
        other = publisher_service.create_publisher({"name": "Other"})

        updated = book_service.update_book(
            created["id"], book_payload(title="New", author="B", price=None, publisher_id=other["id"])
        )

        assert updated["title"] == "New"
        assert updated["price"] is None
        assert updated["publisher"]["id"] == other["id"]
        assert updated["publisher"]["book_count"] == 1
        assert publisher_service.get_publisher_by_name("Acme")["book_count"] == 0

    def test_unchanged_isbn_skips_uniqueness_check(self, book_service, book_payload):
        created = book_service.create_book(book_payload(isbn="111"))
        updated = book_service.update_book(created["id"], book_payload(isbn="111", title="Renamed"))
        assert updated["title"] == "Renamed"

    def test_changed_isbn_must_be_unused(self, book_service, book_payload):
        first = book_service.create_book(book_payload(isbn="111"))
        book_service.create_book(book_payload(isbn="222"))

        with pytest.raises(ConflictError) as exc:
            book_service.update_book(first["id"], book_payload(isbn="222", title="Changed"))

        assert exc.value.reason == DUPLICATE_ISBN
        assert book_service.get_book_by_id(first["id"])["title"] == "T"

    def test_missing_book(self, book_service, book_payload):
        with pytest.raises(NotFoundError) as exc:
            book_service.update_book("missing", book_payload())
        assert exc.value.entity == "Book"

    def test_unknown_publisher_leaves_book_unchanged(self, book_service, book_payload, acme):
        created = book_service.create_book(book_payload())

        with pytest.raises(NotFoundError) as exc:
            book_service.update_book(created["id"], book_payload(title="Changed", publisher_id="missing"))

        assert exc.value.entity == "Publisher"
        storage.close()
        unchanged = book_service.get_book_by_id(created["id"])
        assert unchanged["title"] == "T"
        assert unchanged["publisher"]["id"] == acme["id"]

    def test_detail_created_when_absent(self, book_service, book_payload):
        created = book_service.create_book(book_payload())
        updated = book_service.update_book(created["id"], book_payload(detail={"language": "Korean"}))

        assert updated["detail"]["language"] == "Korean"
        assert updated["detail"]["edition"] is None
        assert storage.count(BookDetail) == 1

    def test_detail_overwritten_in_place(self, book_service, book_payload):
        created = book_service.create_book(book_payload(detail=DETAIL))
        detail_id = created["detail"]["id"]

        updated = book_service.update_book(created["id"], book_payload(detail={"edition": "2nd Edition"}))

        assert updated["detail"]["id"] == detail_id
        assert updated["detail"]["edition"] == "2nd Edition"
        # Every detail field is replaced, not merged
        assert updated["detail"]["description"] is None
        assert storage.count(BookDetail) == 1

    def test_omitting_detail_keeps_existing_detail(self, book_service, book_payload):
        created = book_service.create_book(book_payload(detail=DETAIL))

        updated = book_service.update_book(created["id"], book_payload(title="Only the title"))

        assert updated["detail"]["description"] == DETAIL["description"]
        assert storage.count(BookDetail) == 1


class TestDeleteBook:

    def test_cascades_to_detail(self, book_service, book_payload):
        created = book_service.create_book(book_payload(detail=DETAIL))
        detail_id = created["detail"]["id"]

        book_service.delete_book(created["id"])

        with pytest.raises(NotFoundError):
            book_service.get_book_by_id(created["id"])
        with pytest.raises(NotFoundError) as exc:
            book_service.get_book_detail(detail_id)
        assert exc.value.entity == "BookDetail"

    def test_missing_book(self, book_service):
        with pytest.raises(NotFoundError):
            book_service.delete_book("missing")

    def test_count_tracks_creates_and_deletes(self, book_service, book_payload, acme):
        ids = [book_service.create_book(book_payload(isbn=f"97800000000{i:02d}"))["id"] for i in range(5)]
        for book_id in ids[:2]:
            book_service.delete_book(book_id)

        assert BookRepository(storage.get_session()).count_by_publisher_id(acme["id"]) == 3


class TestLookups:

    def test_title_search_is_case_insensitive(self, book_service, book_payload):
        book_service.create_book(book_payload(title="Clean Code"))

        assert [b["title"] for b in book_service.get_books_by_title("clean")] == ["Clean Code"]
        assert [b["title"] for b in book_service.get_books_by_title("CODE")] == ["Clean Code"]
        assert book_service.get_books_by_title("xyz") == []

    def test_author_search(self, book_service, book_payload):
        book_service.create_book(book_payload(author="Robert C. Martin"))
        assert len(book_service.get_books_by_author("MARTIN")) == 1
        assert book_service.get_books_by_author("fowler") == []

    def test_get_by_isbn(self, book_service, book_payload):
        book_service.create_book(book_payload(isbn="111", detail=DETAIL))

        found = book_service.get_book_by_isbn("111")

        assert found["detail"]["language"] == "English"
        assert found["publisher"]["book_count"] == 1
        with pytest.raises(NotFoundError) as exc:
            book_service.get_book_by_isbn("222")
        assert (exc.value.key, exc.value.value) == ("isbn", "222")

    def test_all_books_include_books_without_publisher(self, book_service, simple_book_service, book_payload):
        book_service.create_book(book_payload(isbn="111"))
        book_service.create_book(book_payload(isbn="222"))
        simple_book_service.create_book({"title": "Loose", "author": "Nobody", "isbn": "333"})

        books = {b["isbn"]: b for b in book_service.get_all_books()}

        assert set(books) == {"111", "222", "333"}
        assert books["111"]["publisher"]["book_count"] == 2
        assert books["333"]["publisher"] is None
        assert books["333"]["detail"] is None

    def test_books_by_publisher_requires_existing_publisher(self, book_service, book_payload, acme):
        book_service.create_book(book_payload())

        assert len(book_service.get_books_by_publisher_id(acme["id"])) == 1
        with pytest.raises(NotFoundError) as exc:
            book_service.get_books_by_publisher_id("missing")
        assert exc.value.entity == "Publisher"

    def test_details_by_imprint(self, book_service, book_payload):
        created = book_service.create_book(book_payload(detail=DETAIL))

        details = book_service.get_book_details_by_imprint("Prentice Hall")

        assert [d["book"]["id"] for d in details] == [created["id"]]
        assert book_service.get_book_details_by_imprint("Nobody") == []
