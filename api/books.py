"""
Book-only endpoints: plain CRUD on books, with no publisher or detail checks.
The publisher-aware variants live in api/book_details.py.
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify

from models.schemas.book import SimpleBookCreateSchema, SimpleBookUpdateSchema
from services.simple_book_service import SimpleBookService

bp = Blueprint("books", __name__)

# Schemas
book_create_schema = SimpleBookCreateSchema()
book_update_schema = SimpleBookUpdateSchema()

service = SimpleBookService()


@bp.get("/books")
def list_books():
    """
    List all books
    ---
    tags:
      - Books
    responses:
      200:
        description: List of books
    """
    return jsonify({"data": service.get_all_books()})


@bp.get("/books/<book_id>")
def get_book(book_id: str):
    """
    Get a single book by id
    ---
    tags:
      - Books
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


@bp.get("/books/isbn/<isbn>")
def get_book_by_isbn(isbn: str):
    """
    Get a single book by ISBN (exact, as stored)
    ---
    tags:
      - Books
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


@bp.get("/books/author/<author>")
def get_books_by_author(author: str):
    """
    Books whose author contains the given text (case-insensitive)
    ---
    tags:
      - Books
    parameters:
      - in: path
        name: author
        type: string
        required: true
    responses:
      200:
        description: Matching books (possibly empty)
    """
    return jsonify({"data": service.get_books_by_author(author)})


@bp.post("/books")
def create_book():
    """
    Create a new book
    ---
    tags:
      - Books
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [title, author, isbn]
          properties:
            title: { type: string, maxLength: 255 }
            author: { type: string, maxLength: 255 }
            isbn: { type: string, description: "10 or 13 digits, hyphens allowed" }
            price: { type: integer, minimum: 0 }
            publish_date: { type: string, format: date }
    responses:
      201:
        description: Created
      409:
        description: Book with same ISBN already exists
      422:
        description: Validation error
    """
    data = book_create_schema.load(request.get_json(silent=True) or {})
    return jsonify({"data": service.create_book(data)}), 201


@bp.patch("/books/<book_id>")
def update_book(book_id: str):
    """
    Update a book (partial)
    ---
    tags:
      - Books
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
    responses:
      200:
        description: Updated
      404:
        description: Not found
      409:
        description: Conflict (duplicate ISBN)
      422:
        description: Validation error
    """
    data = book_update_schema.load(request.get_json(silent=True) or {})
    return jsonify({"data": service.update_book(book_id, data)})


@bp.delete("/books/<book_id>")
def delete_book(book_id: str):
    """
    Delete a book (its detail is deleted with it)
    ---
    tags:
      - Books
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
