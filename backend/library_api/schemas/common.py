"""Shared response schemas."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response schema."""
    error: str
    detail: str | None = None
    request_id: str | None = None


def describe_links(extra: dict[str, Any] | None = None) -> dict[str, Any]:
    """OpenAPI description for responses that can be shaped and negotiated."""
    description = {
        "description": (
            "Shaped resource(s). Send `Accept: application/vnd.marvin.hateoas+json` "
            "to receive hypermedia links."
        ),
        "content": {
            "application/json": {},
            "application/vnd.marvin.hateoas+json": {},
        },
    }
    if extra:
        description.update(extra)
    return description
