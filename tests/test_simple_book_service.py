"""Book-only management without publisher checks."""
import pytest

from models import storage
from models.book import Book
from models.book_detail import BookDetail
from services.exceptions import ConflictError, NotFoundError, DUPLICATE_ISBN


def _row(isbn, **extra):
    row = {"title": f"Book {isbn}", "author": "Author", "isbn": isbn}
    row.update(extra)
    return row


def test_create_and_read_back(simple_book_service):
    created = simple_book_service.create_book(_row("111", price=100))

    assert created["publisher_id"] is None
    assert simple_book_service.get_book_by_id(created["id"])["price"] == 100
    assert simple_book_service.get_book_by_isbn("111")["id"] == created["id"]
    assert simple_book_service.count_books() == 1


def test_create_rejects_duplicate_isbn(simple_book_service):
    simple_book_service.create_book(_row("111"))

    with pytest.raises(ConflictError) as exc:
        simple_book_service.create_book(_row("111"))

    assert exc.value.reason == DUPLICATE_ISBN
    assert simple_book_service.count_books() == 1


def test_lookups_of_unknown_book(simple_book_service):
    with pytest.raises(NotFoundError):
        simple_book_service.get_book_by_id("missing")
    with pytest.raises(NotFoundError) as exc:
        simple_book_service.get_book_by_isbn("999")
    assert exc.value.key == "isbn"


def test_author_search_and_listing(simple_book_service):
    simple_book_service.create_book(_row("111", author="Martin Fowler"))
    simple_book_service.create_book(_row("222", author="Kent Beck"))

    assert [b["isbn"] for b in simple_book_service.get_books_by_author("fowler")] == ["111"]
    assert len(simple_book_service.get_all_books()) == 2


class TestBulkCreate:

    def test_inserts_every_row(self, simple_book_service):
        created = simple_book_service.create_books(
            [_row("111", detail={"language": "English"}), _row("222")]
        )

        assert len(created) == 2
        assert storage.count(Book) == 2
        assert storage.count(BookDetail) == 1

    def test_isbn_repeated_inside_batch_rejects_all(self, simple_book_service):
        with pytest.raises(ConflictError):
            simple_book_service.create_books([_row("111"), _row("222"), _row("111")])
        assert storage.count(Book) == 0

    def test_isbn_already_stored_rejects_all(self, simple_book_service):
        simple_book_service.create_book(_row("222"))

        with pytest.raises(ConflictError) as exc:
            simple_book_service.create_books([_row("111"), _row("222")])

        assert exc.value.payload == {"isbn": "222"}
        assert storage.count(Book) == 1


class TestUpdate:

    def test_only_present_fields_change(self, simple_book_service):
        created = simple_book_service.create_book(_row("111", price=100))

        updated = simple_book_service.update_book(created["id"], {"title": "Renamed"})

        assert updated["title"] == "Renamed"
        assert updated["price"] == 100
        assert updated["isbn"] == "111"

    def test_isbn_change_must_be_unused(self, simple_book_service):
        first = simple_book_service.create_book(_row("111"))
        simple_book_service.create_book(_row("222"))

        with pytest.raises(ConflictError):
            simple_book_service.update_book(first["id"], {"isbn": "222"})
        assert simple_book_service.get_book_by_id(first["id"])["isbn"] == "111"

    def test_missing_book(self, simple_book_service):
        with pytest.raises(NotFoundError):
            simple_book_service.update_book("missing", {"title": "X"})


def test_delete_removes_book_and_detail(simple_book_service):
    created = simple_book_service.create_book(_row("111", detail={"edition": "1st"}))

    simple_book_service.delete_book(created["id"])

    assert simple_book_service.count_books() == 0
    assert storage.count(BookDetail) == 0
    with pytest.raises(NotFoundError):
        simple_book_service.delete_book(created["id"])
