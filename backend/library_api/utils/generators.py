"""ID generation utilities."""

import uuid


def generate_request_id() -> str:
    """Generate a unique request ID (a random UUID)."""
    return str(uuid.uuid4())
