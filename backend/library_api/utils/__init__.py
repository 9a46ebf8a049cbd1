"""Utility functions organized by domain.

All functions are re-exported here; prefer importing from specific modules:
    from library_api.utils.converters import normalize_path
    from library_api.utils.formatting import calculate_age
    from library_api.utils.generators import generate_request_id
"""

# Converters
from .converters import normalize_path, parse_uuid_list

# Formatting
from .formatting import calculate_age

# Generators
from .generators import generate_request_id

__all__ = [
    # Converters
    "normalize_path",
    "parse_uuid_list",
    # Formatting
    "calculate_age",
    # Generators
    "generate_request_id",
]
