import logging

from flask import Blueprint
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from models import storage
from models.book import Book
from models.publisher import Publisher

bp = Blueprint("health", __name__)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@bp.get("/health")
def health():
    """
    Liveness plus a database ping and catalog totals
    ---
    tags:
      - Health
    responses:
      200:
        description: API and database are up
        schema:
          type: object
          properties:
            status: { type: string, example: ok }
            database: { type: string, example: ok }
            version: { type: string, example: 1.0.0 }
            books: { type: integer, example: 14 }
            publishers: { type: integer, example: 3 }
      503:
        description: Database unreachable
    """
    try:
        storage.get_session().execute(text("SELECT 1"))
        books = storage.count(Book)
        publishers = storage.count(Publisher)
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        storage.rollback()
        return {"status": "degraded", "database": "unavailable", "version": VERSION}, 503
    return {
        "status": "ok",
        "database": "ok",
        "version": VERSION,
        "books": books,
        "publishers": publishers,
    }, 200
