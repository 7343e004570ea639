"""
Ordered HTTP header name/value pairs, as edited in a header table.
"""
from .pairs import (
    HEADER_NAME_PATTERN,
    HeaderPair,
    HeaderPairs,
    HeadersChangeListener,
    headers_to_pairs,
    is_valid_header_name,
    pairs_to_headers,
)

__all__ = [
    "HEADER_NAME_PATTERN",
    "HeaderPair",
    "HeaderPairs",
    "HeadersChangeListener",
    "headers_to_pairs",
    "is_valid_header_name",
    "pairs_to_headers",
]

__version__ = "1.0.0"
