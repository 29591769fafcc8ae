from sqlalchemy import Column, String, Integer, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class BookDetail(BaseModel, Base):
    __tablename__ = "book_details"

    description = Column(Text, nullable=True)
    language = Column(String(64), nullable=True)
    page_count = Column(Integer, nullable=True)  # validated >= 0 if provided
    # Imprint name printed on the book; free text, not a reference to publishers
    publisher = Column(String(255), nullable=True)
    cover_image_url = Column(String(512), nullable=True)
    edition = Column(String(64), nullable=True)

    # One detail per book; the row goes away with its book
    book_id = Column(
        String(36),
        ForeignKey("books.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    book = relationship("Book", back_populates="detail")

    __table_args__ = (
        CheckConstraint("(page_count IS NULL) OR (page_count >= 0)", name="ck_book_details_page_count_nonnegative"),
    )
