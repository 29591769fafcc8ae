from sqlalchemy import (
    Column,
    String,
    Integer,
    ForeignKey,
    Date,
    CheckConstraint,
    UniqueConstraint,
    Index,
)
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base
from models.schemas.common import ISBN_MAX_LENGTH


class Book(BaseModel, Base):
    __tablename__ = "books"
    __required__ = ("title", "author", "isbn")

    title = Column(String(255), nullable=False)
    author = Column(String(255), nullable=False)
    # Stored as submitted (digits and hyphens); uniqueness enforced here
    isbn = Column(String(ISBN_MAX_LENGTH), nullable=False)
    price = Column(Integer, nullable=True)  # validated >= 0 if provided
    publish_date = Column(Date, nullable=True)  # validated not in future (in schema)

    # Publisher: RESTRICT deletion if books reference it
    publisher_id = Column(String(36), ForeignKey("publishers.id", ondelete="RESTRICT"), nullable=True, index=True)

    # The book owns its detail; removing the book (or detaching the detail) deletes it
    detail = relationship(
        "BookDetail",
        back_populates="book",
        uselist=False,
        cascade="all, delete-orphan",
    )
    # One-way: a publisher's books are looked up, not kept as a collection
    publisher = relationship("Publisher")

    __table_args__ = (
        UniqueConstraint("isbn", name="uq_books_isbn"),
        CheckConstraint("(price IS NULL) OR (price >= 0)", name="ck_books_price_nonnegative"),
        Index("ix_books_title", "title"),
        Index("ix_books_author", "author"),
    )
