"""
Internal $ref resolution for JSON schema and OpenAPI documents.
"""
from .resolver import (
    SchemaReferenceError,
    dereference,
    follow_refs,
    is_ref,
    resolve_pointer,
)

__all__ = [
    "SchemaReferenceError",
    "dereference",
    "follow_refs",
    "is_ref",
    "resolve_pointer",
]

__version__ = "1.0.0"
