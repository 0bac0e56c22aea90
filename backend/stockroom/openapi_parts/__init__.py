"""Static pieces for the programmatic OpenAPI builder.

Schemas and per-endpoint metadata live here so the builder itself only
walks the URL map.
"""

__all__ = [
    "constants",
    "helpers",
]
