"""
Publisher-aware book endpoints. Responses carry the book's detail (or null)
and a publisher summary with the publisher's current book count.
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify, abort

from models.schemas.book import BookRequestSchema
from services.book_service import BookService

bp = Blueprint("book_details", __name__)

book_request_schema = BookRequestSchema()

service = BookService()


def require_arg(name: str) -> str:
    value = request.args.get(name)
    if value is None:
        abort(400, description=f"Query parameter '{name}' is required")
    return value


@bp.get("/books/details")
def list_books():
    """
    List all books with details and publishers
    ---
    tags:
      - Book details
    responses:
      200:
        description: List of books
    """
    return jsonify({"data": service.get_all_books()})


@bp.get("/books/details/<book_id>")
def get_book(book_id: str):
    """
    Get a book with its detail and publisher
    ---
    tags:
      - Book details
    parameters:
      - in: path
        name: book_id
        type: string
        required: true
    responses:
      200:
        description: Book found
      404:
        description: Not found
    """
    return jsonify({"data": service.get_book_by_id(book_id)})


@bp.get("/books/details/isbn/<isbn>")
def get_book_by_isbn(isbn: str):
    """
    Get a book with its detail and publisher by ISBN
    ---
    tags:
      - Book details
    parameters:
      - in: path
        name: isbn
        type: string
        required: true
    responses:
      200:
        description: Book found
      404:
        description: Not found
    """
    return jsonify({"data": service.get_book_by_isbn(isbn)})


@bp.get("/books/details/search/author")
def search_by_author():
    """
    Case-insensitive substring search on author
    ---
    tags:
      - Book details
    parameters:
      - in: query
        name: author
        type: string
        required: true
    responses:
      200:
        description: Matching books (possibly empty)
    """
    return jsonify({"data": service.get_books_by_author(require_arg("author"))})


@bp.get("/books/details/search/title")
def search_by_title():
    """
    Case-insensitive substring search on title
    ---
    tags:
      - Book details
    parameters:
      - in: query
        name: title
        type: string
        required: true
    responses:
      200:
        description: Matching books (possibly empty)
    """
    return jsonify({"data": service.get_books_by_title(require_arg("title"))})


@bp.post("/books/details")
def create_book():
    """
    Create a book under an existing publisher, optionally with a detail
    ---
    tags:
      - Book details
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [title, author, isbn, publisher_id]
          properties:
            title: { type: string, maxLength: 255 }
            author: { type: string, maxLength: 255 }
            isbn: { type: string, description: "10 or 13 digits, hyphens allowed" }
            price: { type: integer, minimum: 0 }
            publish_date: { type: string, format: date }
            publisher_id: { type: string }
            detail:
              type: object
              properties:
                description: { type: string }
                language: { type: string }
                page_count: { type: integer, minimum: 0 }
                publisher: { type: string, description: "Imprint printed on the book" }
                cover_image_url: { type: string }
                edition: { type: string }
    responses:
      201:
        description: Created
      404:
        description: Publisher not found
      409:
        description: ISBN already exists
      422:
        description: Validation error
    """
    data = book_request_schema.load(request.get_json(silent=True) or {})
    return jsonify({"data": service.create_book(data)}), 201


@bp.put("/books/details/<book_id>")
def update_book(book_id: str):
    """
    Replace a book's fields and publisher; a detail payload creates or overwrites the detail
    ---
    tags:
      - Book details
    consumes:
      - application/json
    parameters:
      - in: path
        name: book_id
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [title, author, isbn, publisher_id]
          properties:
            title: { type: string, maxLength: 255 }
            author: { type: string, maxLength: 255 }
            isbn: { type: string, description: "10 or 13 digits, hyphens allowed" }
            price: { type: integer, minimum: 0 }
            publish_date: { type: string, format: date }
            publisher_id: { type: string }
            detail:
              type: object
              properties:
                description: { type: string }
                language: { type: string }
                page_count: { type: integer, minimum: 0 }
                publisher: { type: string, description: "Imprint printed on the book" }
                cover_image_url: { type: string }
                edition: { type: string }
    responses:
      200:
        description: Updated
      404:
        description: Book or publisher not found
      409:
        description: ISBN already exists
      422:
        description: Validation error
    """
    data = book_request_schema.load(request.get_json(silent=True) or {})
    return jsonify({"data": service.update_book(book_id, data)})


@bp.delete("/books/details/<book_id>")
def delete_book(book_id: str):
    """
    Delete a book and its detail
    ---
    tags:
      - Book details
    parameters:
      - in: path
        name: book_id
        type: string
        required: true
    responses:
      204:
        description: Deleted
      404:
        description: Not found
    """
    service.delete_book(book_id)
    return ("", 204)


@bp.get("/book-details")
def list_details_by_imprint():
    """
    Book details whose printed imprint matches exactly
    ---
    tags:
      - Book details
    parameters:
      - in: query
        name: imprint
        type: string
        required: true
    responses:
      200:
        description: Matching details (possibly empty)
    """
    return jsonify({"data": service.get_book_details_by_imprint(require_arg("imprint"))})


@bp.get("/book-details/<detail_id>")
def get_detail(detail_id: str):
    """
    Get a single book detail with its book summary
    ---
    tags:
      - Book details
    parameters:
      - in: path
        name: detail_id
        type: string
        required: true
    responses:
      200:
        description: Detail found
      404:
        description: Not found
    """
    return jsonify({"data": service.get_book_detail(detail_id)})

