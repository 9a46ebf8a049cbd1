"""SQLAlchemy Model for Books."""

from uuid import uuid4

from sqlalchemy import Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from ..db.database import Base

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class Book(Base):
    """A book written by one author."""

    __tablename__ = "books"

    id = Column(Uuid, primary_key=True, default=uuid4)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    description = Column(String(DESCRIPTION_MAX_LENGTH), nullable=True)
    author_id = Column(
        Uuid,
        ForeignKey("authors.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    author = relationship("Author", back_populates="books")

    def __repr__(self):
        return f"<Book(id={self.id}, title={self.title}, author_id={self.author_id})>"
