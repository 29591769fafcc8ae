"""
`flask seed-books`: load a fixed sample catalog for local development.

Books are inserted through the book-only path, so none of them has a
publisher; most carry a detail and three do not.
"""
from __future__ import annotations

import logging
from datetime import date

import click
from flask import current_app

from services.simple_book_service import SimpleBookService

logger = logging.getLogger(__name__)


def _book(title, author, isbn, price, publish_date, detail=None):
    return {
        "title": title,
        "author": author,
        "isbn": isbn,
        "price": price,
        "publish_date": publish_date,
        "detail": detail,
    }


def _detail(description, language, page_count, imprint, cover_image_url, edition):
    return {
        "description": description,
        "language": language,
        "page_count": page_count,
        "publisher": imprint,
        "cover_image_url": cover_image_url,
        "edition": edition,
    }


SAMPLE_BOOKS = [
    # Programming
    _book("Java Fundamentals", "Kim Java", "978-8979148123", 25000, date(2023, 1, 15),
          _detail("A complete guide to Java from the basics to advanced topics",
                  "Korean", 480, "Hanguk Publishing", None, "1st Edition")),
    _book("Python Cookbook", "David Beazley", "978-1449340377", 42000, date(2022, 5, 20),
          _detail("Practical recipes and techniques for Python programming",
                  "English", 706, "O'Reilly Media", "https://example.com/python-cookbook.jpg", "3rd Edition")),
    _book("Modern Web Development", "Lee Web", "978-8960778245", 35000, date(2023, 3, 10),
          _detail("Current web development with HTML5, CSS3 and JavaScript",
                  "Korean", 520, "Web Tech Press", "https://example.com/modern-web.jpg", "2nd Edition")),
    # Databases
    _book("Database System Concepts", "Abraham Silberschatz", "978-0073523323", 55000, date(2020, 8, 15),
          _detail("A comprehensive introduction to database concepts and design",
                  "English", 1376, "McGraw-Hill Education", "https://example.com/db-concepts.jpg", "7th Edition")),
    _book("Mastering SQL", "Park Data", "978-8968482977", 28000, date(2023, 6, 5),
          _detail("From SQL basics to advanced query writing",
                  "Korean", 650, "Database Press", None, "Revised Edition")),
    # Algorithms and data structures
    _book("Introduction to Algorithms", "Thomas H. Cormen", "978-0262033848", 89000, date(2021, 12, 1),
          _detail("A comprehensive textbook on the design and analysis of algorithms",
                  "English", 1312, "MIT Press", "https://example.com/algorithms.jpg", "4th Edition")),
    _book("Data Structures and Algorithms", "Jung Algo", "978-8931436543", 32000, date(2022, 11, 20),
          _detail("Hands-on design of efficient data structures and algorithms",
                  "Korean", 450, "Algorithm Press", "https://example.com/data-structures.jpg", "3rd Edition")),
    # Software engineering
    _book("Software Engineering", "Ian Sommerville", "978-0133943030", 72000, date(2020, 4, 10),
          _detail("Theory and practice of software engineering",
                  "English", 816, "Pearson", "https://example.com/software-eng.jpg", "10th Edition")),
    _book("Clean Architecture", "Robert C. Martin", "978-8966262472", 32000, date(2019, 8, 25),
          _detail("Principles of software structure and design",
                  "Korean", 352, "Insight", "https://example.com/clean-architecture.jpg", "1st Edition")),
    # AI and machine learning
    _book("Hands-On Machine Learning", "Aurélien Géron", "978-1492032649", 58000, date(2022, 9, 15),
          _detail("A practical guide to machine learning you can apply right away",
                  "English", 856, "O'Reilly Media", "https://example.com/ml-hands-on.jpg", "2nd Edition")),
    _book("Deep Learning", "Ian Goodfellow", "978-8968484636", 68000, date(2021, 7, 30),
          _detail("Mathematical foundations and practical implementation of deep learning",
                  "Korean", 775, "J-Pub", "https://example.com/deep-learning.jpg", "Translated Edition")),
    # No detail
    _book("A Simple Introduction to Programming", "Hong Gildong", "978-8979143210", 18000, date(2023, 2, 28)),
    _book("Basic Computer Science", "John Smith", "978-1234567890", 25000, date(2022, 12, 15)),
    _book("Network Security Basics", "Kim Security", "978-8960771234", 30000, date(2023, 4, 20)),
]


def seed_books(service: SimpleBookService | None = None, minimum: int = 15) -> int:
    """Insert SAMPLE_BOOKS unless ``minimum`` books already exist. Returns the number inserted."""
    service = service or SimpleBookService()
    existing = service.count_books()
    if existing >= minimum:
        logger.info("Sufficient book data already exists (%d books), skipping seed", existing)
        return 0

    # Re-running after a partial catalog skips sample books already present
    rows = [row for row in SAMPLE_BOOKS if not service.books.exists_by_isbn(row["isbn"])]
    logger.info("Seeding %d sample books", len(rows))
    created = service.create_books(rows)
    logger.info("Seeded %d books with and without details", len(created))
    return len(created)


def register_commands(app):
    @app.cli.command("seed-books")
    def seed_books_command():
        """Insert the sample catalog (books with and without details)."""
        inserted = seed_books(minimum=current_app.config["SEED_MIN_BOOKS"])
        click.echo(f"Inserted {inserted} book(s).")
