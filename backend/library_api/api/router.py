"""API Router.

Aggregates the resource endpoints served under the API prefix.
"""

from fastapi import APIRouter

from .endpoints import author_collections, authors, books

api_router = APIRouter()

# Authors
api_router.include_router(
    authors.router,
    prefix="/authors",
    tags=["Authors"]
)

# Books, nested under their author
api_router.include_router(
    books.router,
    prefix="/authors/{author_id}/books",
    tags=["Books"]
)

# Author collections
api_router.include_router(
    author_collections.router,
    prefix="/authorcollections",
    tags=["Author Collections"]
)
