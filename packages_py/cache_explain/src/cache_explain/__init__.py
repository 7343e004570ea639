"""
Explain HTTP response cacheability.

Given a captured request/response exchange, determines whether a private
HTTP cache would store and reuse the response, why, and what could be improved.
Covers Cache-Control, Pragma, Expires, Vary, validators, CORS preflights and
status code defaults.
"""
from .types import (
    CacheabilityResult,
    CacheabilitySummary,
    CacheControlDirectives,
    Exchange,
    ExchangeFacts,
    ExplanationFragment,
    PragmaDirectives,
    Severity,
    Timestamps,
    Validators,
    Verdict,
)
from .parser import (
    extract_etag,
    extract_last_modified,
    get_header_value,
    interpret_exchange,
    is_vary_uncacheable,
    normalize_headers,
    parse_cache_control,
    parse_date_header,
    parse_delta_seconds,
    parse_pragma,
    parse_vary,
)
from .advisories import (
    MAX_AGE_ADVISORIES,
    ONE_YEAR_SECONDS,
    evaluate_advisories,
)
from .rules import (
    HEURISTICALLY_CACHEABLE_STATUSES,
    PERMANENTLY_CACHEABLE_STATUSES,
    RULES,
    decide,
    describe_duration,
)
from .explainer import compose_result, explain_cacheability
from .loader import ExchangeLoadError, exchange_from_dict, load_exchange, parse_exchange


__all__ = [
    # Types
    "CacheabilityResult",
    "CacheabilitySummary",
    "CacheControlDirectives",
    "Exchange",
    "ExchangeFacts",
    "ExplanationFragment",
    "PragmaDirectives",
    "Severity",
    "Timestamps",
    "Validators",
    "Verdict",
    # Header interpreter
    "extract_etag",
    "extract_last_modified",
    "get_header_value",
    "interpret_exchange",
    "is_vary_uncacheable",
    "normalize_headers",
    "parse_cache_control",
    "parse_date_header",
    "parse_delta_seconds",
    "parse_pragma",
    "parse_vary",
    # Rules and advisories
    "MAX_AGE_ADVISORIES",
    "ONE_YEAR_SECONDS",
    "evaluate_advisories",
    "HEURISTICALLY_CACHEABLE_STATUSES",
    "PERMANENTLY_CACHEABLE_STATUSES",
    "RULES",
    "decide",
    "describe_duration",
    # Explainer
    "compose_result",
    "explain_cacheability",
    # Loading
    "ExchangeLoadError",
    "exchange_from_dict",
    "load_exchange",
    "parse_exchange",
]

__version__ = "1.0.0"
