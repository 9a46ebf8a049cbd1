"""Type conversion utilities."""

import re
import uuid


def normalize_path(path: str) -> str:
    """Normalize API path by replacing UUIDs and IDs with placeholders.

    Useful for metrics and logging to avoid high cardinality.

    Args:
        path: API path to normalize

    Returns:
        Normalized path with IDs replaced

    Examples:
        >>> normalize_path("/api/authors/a1b2c3d4-e5f6-7890-abcd-ef1234567890/books")
        "/api/authors/{id}/books"
        >>> normalize_path("/api/authorcollections/(a1b2c3d4-...,e5f6a7b8-...)")
        "/api/authorcollections/({ids})"
    """
    if not path:
        return path

    path = re.sub(r'\([^)]*\)', '({ids})', path)

    uuid_pattern = r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}'
    path = re.sub(uuid_pattern, '{id}', path, flags=re.IGNORECASE)

    return re.sub(r'/\d+(?=/|$)', '/{id}', path)


def parse_uuid_list(value: str) -> list[uuid.UUID]:
    """Parse a comma-separated list of UUIDs, optionally wrapped in parentheses.

    Args:
        value: e.g. "(a1b2...,c3d4...)" or "a1b2...,c3d4..."

    Returns:
        UUIDs in the order given

    Raises:
        ValueError: If the list is empty or any element is not a UUID
    """
    value = value.strip()
    if value.startswith("(") and value.endswith(")"):
        value = value[1:-1]

    tokens = [token.strip() for token in value.split(",") if token.strip()]
    if not tokens:
        raise ValueError("Identifier list is empty")

    return [uuid.UUID(token) for token in tokens]
