from __future__ import annotations

from flask import Blueprint, request, jsonify

from models.schemas.publisher import PublisherRequestSchema
from services.book_service import BookService
from services.publisher_service import PublisherService

bp = Blueprint("publishers", __name__)

request_schema = PublisherRequestSchema()

service = PublisherService()
book_service = BookService()


@bp.post("/publishers")
def create_publisher():
    """
    Create a publisher
    ---
    tags: [Publishers]
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [name]
          properties:
            name: { type: string, maxLength: 128 }
            established_date: { type: string, format: date }
            address: { type: string, maxLength: 255 }
    responses:
      201: { description: Created }
      409: { description: Name already exists }
      422: { description: Validation error }
    """
    data = request_schema.load(request.get_json(silent=True) or {})
    return jsonify({"data": service.create_publisher(data)}), 201


@bp.get("/publishers")
def list_publishers():
    """
    List publishers, each with its current book count
    ---
    tags: [Publishers]
    responses:
      200: { description: OK }
    """
    return jsonify({"data": service.get_all_publishers()})


@bp.get("/publishers/<publisher_id>")
def get_publisher(publisher_id: str):
    """
    Get a publisher by id, with its books
    ---
    tags: [Publishers]
    parameters:
      - in: path
        name: publisher_id
        type: string
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    return jsonify({"data": service.get_publisher_by_id(publisher_id)})


@bp.get("/publishers/name/<name>")
def get_publisher_by_name(name: str):
    """
    Get a publisher by exact name, with its books
    ---
    tags: [Publishers]
    parameters:
      - in: path
        name: name
        type: string
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    return jsonify({"data": service.get_publisher_by_name(name)})


@bp.get("/publishers/<publisher_id>/books")
def list_publisher_books(publisher_id: str):
    """
    Books of a publisher, with details
    ---
    tags: [Publishers]
    parameters:
      - in: path
        name: publisher_id
        type: string
        required: true
    responses:
      200: { description: OK }
      404: { description: Publisher not found }
    """
    return jsonify({"data": book_service.get_books_by_publisher_id(publisher_id)})


@bp.put("/publishers/<publisher_id>")
def update_publisher(publisher_id: str):
    """
    Replace a publisher's fields
    ---
    tags: [Publishers]
    parameters:
      - in: path
        name: publisher_id
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [name]
          properties:
            name: { type: string, maxLength: 128 }
            established_date: { type: string, format: date }
            address: { type: string, maxLength: 255 }
    responses:
      200: { description: OK }
      404: { description: Not found }
      409: { description: Name already exists }
      422: { description: Validation error }
    """
    data = request_schema.load(request.get_json(silent=True) or {})
    return jsonify({"data": service.update_publisher(publisher_id, data)})


@bp.delete("/publishers/<publisher_id>")
def delete_publisher(publisher_id: str):
    """
    Delete a publisher that has no books
    ---
    tags: [Publishers]
    parameters:
      - in: path
        name: publisher_id
        type: string
        required: true
    responses:
      204: { description: Deleted }
      404: { description: Not found }
      409: { description: Publisher still has books (count in details.book_count) }
    """
    service.delete_publisher(publisher_id)
    return ("", 204)
