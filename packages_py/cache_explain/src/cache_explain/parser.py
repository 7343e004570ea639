"""
Header parsing for cacheability explanations.

Every parser here degrades to "absent" on malformed input rather than raising.
"""
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Dict, List, Mapping, Optional

from .types import (
    CacheControlDirectives,
    Exchange,
    ExchangeFacts,
    PragmaDirectives,
    Timestamps,
    Validators,
)


def parse_delta_seconds(value: Optional[str]) -> Optional[int]:
    """Parse a non-negative integer number of seconds."""
    if value is None:
        return None
    value = value.strip().strip('"').strip()
    if not (value.isascii() and value.isdigit()):
        return None
    try:
        return int(value)
    except ValueError:
        # past the interpreter's int string conversion limit
        return None


def parse_cache_control(header: Optional[str]) -> CacheControlDirectives:
    """Parse Cache-Control header into directives."""
    directives = CacheControlDirectives()

    if not header:
        return directives

    for part in header.split(","):
        if "=" in part:
            key, value = part.split("=", 1)
            key = key.strip().lower()
        else:
            key = part.strip().lower()
            value = None

        if key == "no-store":
            directives.no_store = True
        elif key == "no-cache":
            directives.no_cache = True
        elif key == "max-age":
            directives.max_age = parse_delta_seconds(value)
        elif key == "s-maxage":
            directives.s_maxage = parse_delta_seconds(value)
        elif key == "private":
            directives.private = True
        elif key == "public":
            directives.public = True
        elif key == "must-revalidate":
            directives.must_revalidate = True
        elif key == "immutable":
            directives.immutable = True

    return directives


def parse_pragma(header: Optional[str]) -> PragmaDirectives:
    """Parse the no-cache and no-store tokens of a Pragma header."""
    pragma = PragmaDirectives()
    if not header:
        return pragma
    for token in header.split(","):
        token = token.strip().lower()
        if token == "no-cache":
            pragma.no_cache = True
        elif token == "no-store":
            pragma.no_store = True
    return pragma


def extract_etag(headers: Dict[str, str]) -> Optional[str]:
    """Extract ETag from response headers."""
    etag = get_header_value(headers, "etag")
    return etag.strip() if etag else None


def extract_last_modified(headers: Dict[str, str]) -> Optional[str]:
    """Extract Last-Modified from response headers."""
    last_modified = get_header_value(headers, "last-modified")
    return last_modified.strip() if last_modified else None


def parse_date_header(header: Optional[str]) -> Optional[datetime]:
    """Parse an HTTP date to an aware UTC datetime."""
    if not header:
        return None
    try:
        dt = parsedate_to_datetime(header)
        if dt is None:
            return None
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    except (TypeError, ValueError, IndexError, OverflowError):
        return None


def parse_vary(header: Optional[str]) -> List[str]:
    """Parse Vary header into list of header names."""
    if not header:
        return []
    return [h.strip().lower() for h in header.split(",") if h.strip()]


def is_vary_uncacheable(vary: Optional[str]) -> bool:
    """Check if Vary header indicates uncacheable."""
    return "*" in parse_vary(vary)


def get_header_value(
    headers: Mapping[str, Optional[str]], key: str
) -> Optional[str]:
    """Get header value case-insensitively."""
    lower_key = key.lower()
    for k, v in headers.items():
        if k.lower() == lower_key:
            return v
    return None


def normalize_headers(headers: Mapping[str, object]) -> Dict[str, str]:
    """Normalize headers to lowercase keys, dropping absent values."""
    normalized: Dict[str, str] = {}
    for k, v in headers.items():
        if v is None:
            continue
        if not isinstance(v, str):
            v = ", ".join(str(item) for item in v)
        key = k.lower()
        normalized[key] = f"{normalized[key]}, {v}" if key in normalized else v
    return normalized


def interpret_exchange(exchange: Exchange) -> ExchangeFacts:
    """Collect every caching-relevant fact from an exchange."""
    request = normalize_headers(exchange.request_headers)
    response = normalize_headers(exchange.response_headers)

    return ExchangeFacts(
        method=exchange.method.strip().upper(),
        status_code=exchange.status_code,
        url=exchange.url,
        request_directives=parse_cache_control(request.get("cache-control")),
        response_directives=parse_cache_control(response.get("cache-control")),
        has_request_cache_control="cache-control" in request,
        has_response_cache_control="cache-control" in response,
        request_pragma=parse_pragma(request.get("pragma")),
        response_pragma=parse_pragma(response.get("pragma")),
        raw_request_pragma=request.get("pragma"),
        raw_response_pragma=response.get("pragma"),
        validators=Validators(
            etag=extract_etag(response) is not None,
            last_modified=extract_last_modified(response) is not None,
        ),
        timestamps=Timestamps(
            date=parse_date_header(response.get("date")),
            expires=parse_date_header(response.get("expires")),
        ),
        vary_wildcard=is_vary_uncacheable(response.get("vary")),
        access_control_max_age=parse_delta_seconds(
            response.get("access-control-max-age")
        ),
        is_cors_preflight=(
            exchange.method.strip().upper() == "OPTIONS" and "origin" in request
        ),
        content_location=response.get("content-location"),
    )
