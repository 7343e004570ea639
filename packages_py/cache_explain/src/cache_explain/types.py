"""
Types for explaining HTTP response cacheability.
"""
import collections.abc
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

from header_pairs import pairs_to_headers


HeaderValue = Union[str, Sequence[str], None]
"""A raw header value: a string, several values for one name, or absent."""


@dataclass
class CacheControlDirectives:
    """Parsed Cache-Control directives."""

    no_store: bool = False
    """Response must not be cached."""

    no_cache: bool = False
    """Response must be revalidated before use."""

    max_age: Optional[int] = None
    """Maximum age in seconds."""

    s_maxage: Optional[int] = None
    """Shared cache maximum age in seconds."""

    private: bool = False
    """Response is private (user-specific)."""

    public: bool = False
    """Response is public (can be cached by shared caches)."""

    must_revalidate: bool = False
    """Response must be revalidated if stale."""

    immutable: bool = False
    """Response will not change."""


@dataclass
class PragmaDirectives:
    """Legacy HTTP/1.0 Pragma tokens."""

    no_cache: bool = False
    no_store: bool = False

    @property
    def any(self) -> bool:
        return self.no_cache or self.no_store


@dataclass
class Validators:
    """Presence of response headers that allow cheap revalidation."""

    etag: bool = False
    last_modified: bool = False

    @property
    def any(self) -> bool:
        return self.etag or self.last_modified


@dataclass
class Timestamps:
    """Response Date and Expires, as aware UTC datetimes when parseable."""

    date: Optional[datetime] = None
    expires: Optional[datetime] = None


@dataclass(frozen=True)
class Exchange:
    """
    A captured request/response pair.

    Header names are matched case-insensitively. A value of None means the
    header is absent. Multi-valued headers should already be combined into a
    single comma-separated string; use Exchange.create() to do that from
    lists or header pairs.
    """

    method: str
    status_code: int
    request_headers: Mapping[str, Optional[str]] = field(default_factory=dict)
    response_headers: Mapping[str, Optional[str]] = field(default_factory=dict)
    url: Optional[str] = None
    """Request URL, or just its path and query."""

    @classmethod
    def create(
        cls,
        method: str,
        status_code: Union[int, str],
        request_headers: Union[
            Mapping[str, HeaderValue], Iterable[Tuple[str, str]], None
        ] = None,
        response_headers: Union[
            Mapping[str, HeaderValue], Iterable[Tuple[str, str]], None
        ] = None,
        url: Optional[str] = None,
    ) -> "Exchange":
        """Build an exchange from loosely shaped header data."""

        def combine(headers: Any) -> Dict[str, Optional[str]]:
            if headers is None:
                return {}
            if not isinstance(headers, collections.abc.Mapping):
                headers = pairs_to_headers(headers)
            combined: Dict[str, Optional[str]] = {}
            for name, value in headers.items():
                if value is not None and not isinstance(value, str):
                    value = ", ".join(str(v) for v in value)
                combined[name] = value
            return combined

        return cls(
            method=method,
            status_code=int(status_code),
            request_headers=combine(request_headers),
            response_headers=combine(response_headers),
            url=url,
        )


@dataclass(frozen=True)
class ExchangeFacts:
    """Everything the decision rules need to know about one exchange."""

    method: str
    status_code: int
    url: Optional[str]
    request_directives: CacheControlDirectives
    response_directives: CacheControlDirectives
    has_request_cache_control: bool
    has_response_cache_control: bool
    request_pragma: PragmaDirectives
    response_pragma: PragmaDirectives
    raw_request_pragma: Optional[str]
    raw_response_pragma: Optional[str]
    validators: Validators
    timestamps: Timestamps
    vary_wildcard: bool
    access_control_max_age: Optional[int]
    is_cors_preflight: bool
    content_location: Optional[str]


class Severity(str, Enum):
    """How strongly an explanation asks for a change."""

    SUGGESTION = "suggestion"
    WARNING = "warning"


class CacheabilitySummary(str, Enum):
    """The closed set of cacheability verdicts."""

    CACHEABLE = "Cacheable"
    NOT_CACHEABLE = "Not cacheable"
    PROBABLY_CACHEABLE = "Probably cacheable"
    TYPICALLY_NOT_CACHEABLE = "Typically not cacheable"
    VERY_BRIEFLY_CACHEABLE = "Very briefly cacheable"
    MAY_BE_CACHEABLE_FOR_GET = "May be cacheable for future GET/HEAD requests"
    NOT_CACHEABLE_BY_PRIVATE_CACHES = "Not cacheable by private (HTTP client) caches"


@dataclass(frozen=True)
class ExplanationFragment:
    """One paragraph of explanation, optionally asking for a change."""

    text: str
    severity: Optional[Severity] = None


@dataclass(frozen=True)
class Verdict:
    """Output of the decision table."""

    summary: CacheabilitySummary
    fragments: Tuple[ExplanationFragment, ...]
    rule: str
    """Name of the rule that fired."""


@dataclass(frozen=True)
class CacheabilityResult:
    """Final explanation of an exchange's cacheability."""

    summary: CacheabilitySummary
    explanation: str
    type: Optional[Severity] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "summary": self.summary.value,
            "type": self.type.value if self.type else None,
            "explanation": self.explanation,
        }
