"""Domain layer.

- transformers: explicit entity <-> DTO mapping functions
- library_resources: shaping registrations for authors and books
"""
