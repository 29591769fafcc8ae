from sqlalchemy import Column, String, Date, UniqueConstraint

from models.base_model import BaseModel, Base


class Publisher(BaseModel, Base):
    __tablename__ = "publishers"
    __required__ = ("name",)

    name = Column(String(128), nullable=False)
    established_date = Column(Date, nullable=True)
    address = Column(String(255), nullable=True)

    # No books collection here. Book.publisher_id has ON DELETE RESTRICT and
    # the publisher's books are fetched with BookRepository.find_by_publisher_id.

    __table_args__ = (
        UniqueConstraint("name", name="uq_publishers_name"),
    )
