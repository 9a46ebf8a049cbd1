"""Sample library data.

Inserted at startup when `SEED_DATA` is enabled and the authors table is
empty, so a fresh database has something to page, sort and shape.
"""

from datetime import date
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.logging import get_logger
from ..models import Author, Book

logger = get_logger(__name__)

SAMPLE_AUTHORS = [
    {
        "id": UUID("25320c5e-f58a-4b1f-b63a-8ee07a840bdf"),
        "first_name": "Stephen",
        "last_name": "King",
        "date_of_birth": date(1947, 9, 21),
        "genre": "Horror",
        "books": [
            ("The Shining", "A family heads to an isolated hotel for the winter."),
            ("Misery", "A famous novelist is held captive by a psychotic fan."),
            ("It", "Seven children are terrorized by an evil entity."),
        ],
    },
    {
        "id": UUID("76053df4-6687-4353-8937-b45556748abe"),
        "first_name": "George",
        "last_name": "RR Martin",
        "date_of_birth": date(1948, 9, 20),
        "genre": "Fantasy",
        "books": [
            ("A Game of Thrones", "The first novel in A Song of Ice and Fire."),
        ],
    },
    {
        "id": UUID("412c3012-d891-4f5e-9613-ff7aa63e6bb3"),
        "first_name": "Neil",
        "last_name": "Gaiman",
        "date_of_birth": date(1960, 11, 10),
        "genre": "Fantasy",
        "books": [
            ("American Gods", "Old gods and new ones fight over America."),
        ],
    },
    {
        "id": UUID("578359b7-1967-41d6-8b87-64ab7605587e"),
        "first_name": "Tom",
        "last_name": "Lanoye",
        "date_of_birth": date(1958, 8, 27),
        "genre": "Various",
        "books": [
            ("Speechless", "A son writes about his mother after her stroke."),
        ],
    },
    {
        "id": UUID("f74d6899-9ed2-4137-9876-66b070553f8f"),
        "first_name": "Douglas",
        "last_name": "Adams",
        "date_of_birth": date(1952, 3, 11),
        "date_of_death": date(2001, 5, 11),
        "genre": "Science fiction",
        "books": [
            ("The Hitchhiker's Guide to the Galaxy", "Earth is demolished for a hyperspace bypass."),
        ],
    },
    {
        "id": UUID("a1da1d8e-1988-4634-b538-a01709477b77"),
        "first_name": "Jens",
        "last_name": "Lapidus",
        "date_of_birth": date(1974, 5, 24),
        "genre": "Thriller",
        "books": [
            ("Easy Money", "A student gets drawn into the Stockholm underworld."),
        ],
    },
]


def build_sample_authors() -> list[Author]:
    authors = []
    for data in SAMPLE_AUTHORS:
        authors.append(
            Author(
                id=data["id"],
                first_name=data["first_name"],
                last_name=data["last_name"],
                date_of_birth=data["date_of_birth"],
                date_of_death=data.get("date_of_death"),
                genre=data["genre"],
                books=[Book(title=title, description=description) for title, description in data["books"]],
            )
        )
    return authors


async def seed_library(session: AsyncSession) -> int:
    """Insert the sample authors unless the library already has authors.

    Returns:
        Number of authors inserted
    """
    existing = (await session.execute(select(func.count()).select_from(Author))).scalar() or 0
    if existing:
        logger.debug("Library already populated, skipping seed", extra={'authors': existing})
        return 0

    authors = build_sample_authors()
    session.add_all(authors)
    await session.commit()
    logger.info("Sample library inserted", extra={'authors': len(authors)})
    return len(authors)
