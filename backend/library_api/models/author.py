"""SQLAlchemy Model for Authors."""

from uuid import uuid4

from sqlalchemy import Column, Date, Index, String, Uuid
from sqlalchemy.orm import relationship

from ..db.database import Base

NAME_MAX_LENGTH = 50
GENRE_MAX_LENGTH = 50


class Author(Base):
    """An author; owns its books (deleting an author deletes them)."""

    __tablename__ = "authors"

    __table_args__ = (
        Index('idx_authors_name', 'first_name', 'last_name'),
        Index('idx_authors_genre', 'genre'),
    )

    id = Column(Uuid, primary_key=True, default=uuid4)
    first_name = Column(String(NAME_MAX_LENGTH), nullable=False)
    last_name = Column(String(NAME_MAX_LENGTH), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    date_of_death = Column(Date, nullable=True)
    genre = Column(String(GENRE_MAX_LENGTH), nullable=False)

    books = relationship(
        "Book",
        back_populates="author",
        cascade="all, delete-orphan",
        order_by="Book.title",
        lazy="selectin"
    )

    def __repr__(self):
        return f"<Author(id={self.id}, name={self.first_name} {self.last_name}, genre={self.genre})>"
