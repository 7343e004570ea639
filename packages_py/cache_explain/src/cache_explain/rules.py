"""
Baseline cacheability rules.

RULES is evaluated in order and the first rule returning a Verdict wins, so a
rule may assume that every rule before it did not match.
"""
from email.utils import format_datetime
from typing import Callable, Optional, Tuple
from urllib.parse import urljoin, urlsplit

from .advisories import (
    MAX_AGE_ADVISORIES,
    evaluate_advisories,
    expires_advisory,
    pragma_advisory,
)
from .types import (
    CacheabilitySummary,
    ExchangeFacts,
    ExplanationFragment,
    Severity,
    Verdict,
)

Rule = Callable[[ExchangeFacts], Optional[Verdict]]

# RFC 9111 4.2.2 heuristically cacheable statuses, split by whether the
# meaning of the status can change over time.
PERMANENTLY_CACHEABLE_STATUSES = frozenset([301, 308, 410, 414, 501])
HEURISTICALLY_CACHEABLE_STATUSES = frozenset([200, 203, 204, 206, 300, 404, 405])

STANDARD_CACHEABLE_METHODS = frozenset(["GET", "HEAD", "POST"])

# Browser limits on preflight caching, in seconds
CHROMIUM_MAX_PREFLIGHT_AGE = 7200
FIREFOX_MAX_PREFLIGHT_AGE = 86400
DEFAULT_PREFLIGHT_AGE = 5

_DURATION_UNITS = (
    (31536000, "year"),
    (86400, "day"),
    (3600, "hour"),
    (60, "minute"),
)


def describe_duration(seconds: int) -> str:
    """Render a number of seconds in the largest unit that divides it exactly."""
    for size, unit in _DURATION_UNITS:
        if seconds >= size and seconds % size == 0:
            count = seconds // size
            return f"{count} {unit}" if count == 1 else f"{count} {unit}s"
    return "1 second" if seconds == 1 else f"{seconds} seconds"


def _verdict(
    rule: str, summary: CacheabilitySummary, *fragments: ExplanationFragment
) -> Verdict:
    return Verdict(summary=summary, fragments=tuple(fragments), rule=rule)


def _text(text: str, severity: Optional[Severity] = None) -> ExplanationFragment:
    return ExplanationFragment(text, severity)


def non_standard_method_rule(facts: ExchangeFacts) -> Optional[Verdict]:
    if facts.method in STANDARD_CACHEABLE_METHODS or facts.is_cors_preflight:
        return None
    return _verdict(
        "non-standard-method",
        CacheabilitySummary.NOT_CACHEABLE,
        _text(f"{facts.method} requests are never cacheable."),
    )


def cors_preflight_rule(facts: ExchangeFacts) -> Optional[Verdict]:
    if not facts.is_cors_preflight:
        return None

    max_age = facts.access_control_max_age
    if max_age is None:
        return _verdict(
            "cors-preflight",
            CacheabilitySummary.VERY_BRIEFLY_CACHEABLE,
            _text(
                "OPTIONS preflight requests are not cacheable, unless an "
                "Access-Control-Max-Age header is provided. Browsers will still "
                f"reuse the result very briefly ({DEFAULT_PREFLIGHT_AGE} seconds "
                "by default) for identical cross-origin requests."
            ),
        )

    explanation = (
        "OPTIONS preflight responses are not cacheable by default, but they "
        "will be cached if an Access-Control-Max-Age header is provided, as "
        "here. Browsers may reuse this preflight result for up to "
        f"{describe_duration(max_age)} for matching cross-origin requests."
    )
    if max_age > CHROMIUM_MAX_PREFLIGHT_AGE:
        explanation += (
            " Note that browsers cap this value: Chromium-based browsers at "
            f"{describe_duration(CHROMIUM_MAX_PREFLIGHT_AGE)}, and Firefox at "
            f"{describe_duration(FIREFOX_MAX_PREFLIGHT_AGE)}."
        )
    return _verdict(
        "cors-preflight", CacheabilitySummary.CACHEABLE, _text(explanation)
    )


def _content_location_matches(facts: ExchangeFacts) -> bool:
    """Check Content-Location identifies the requested URL."""
    if not facts.content_location or not facts.url:
        return False
    request = urlsplit(facts.url)
    target = urlsplit(urljoin(facts.url, facts.content_location.strip()))
    if request.netloc and target.netloc.lower() != request.netloc.lower():
        return False
    return (target.path or "/") == (request.path or "/") and target.query == request.query


def post_rule(facts: ExchangeFacts) -> Optional[Verdict]:
    if facts.method != "POST":
        return None

    directives = facts.response_directives
    has_freshness = (
        directives.public
        or directives.max_age is not None
        or facts.timestamps.expires is not None
    )
    preamble = (
        "POST responses are not typically cacheable, but can be cached for "
        "future GET and HEAD requests to the same URL if they include explicit "
        "freshness information (such as a `public` or `max-age` Cache-Control "
        "directive, or an Expires header) and a Content-Location header "
        "matching the request URL."
    )
    if has_freshness and not directives.no_store and _content_location_matches(facts):
        return _verdict(
            "post",
            CacheabilitySummary.MAY_BE_CACHEABLE_FOR_GET,
            _text(f"{preamble} This response fulfills those conditions."),
        )
    return _verdict(
        "post",
        CacheabilitySummary.NOT_CACHEABLE,
        _text(f"{preamble} This response does not fulfill those conditions."),
    )


def no_store_rule(facts: ExchangeFacts) -> Optional[Verdict]:
    if facts.response_directives.no_store:
        return _verdict(
            "no-store",
            CacheabilitySummary.NOT_CACHEABLE,
            _text(
                "This response includes an explicit `no-store` Cache-Control "
                "directive, so it must not be stored by any cache."
            ),
        )
    if facts.request_directives.no_store:
        return _verdict(
            "no-store",
            CacheabilitySummary.NOT_CACHEABLE,
            _text(
                "The request includes a `no-store` Cache-Control directive, "
                "which forbids caches from storing any part of the request or "
                "its response."
            ),
        )
    return None


def pragma_rule(facts: ExchangeFacts) -> Optional[Verdict]:
    if facts.response_pragma.any and not facts.has_response_cache_control:
        directive = "no-store" if facts.response_pragma.no_store else "no-cache"
        return _verdict(
            "pragma",
            CacheabilitySummary.NOT_CACHEABLE,
            _text(
                f"This response includes a `Pragma: {facts.raw_response_pragma}` "
                f"header. This legacy `{directive}` directive tells caches not "
                "to store or reuse the response."
            ),
            pragma_advisory(directive),
        )
    if facts.request_pragma.no_store and not facts.has_request_cache_control:
        return _verdict(
            "pragma",
            CacheabilitySummary.NOT_CACHEABLE,
            _text(
                f"The request includes a `Pragma: {facts.raw_request_pragma}` "
                "header. This legacy `no-store` directive tells caches not to "
                "store the response."
            ),
            pragma_advisory("no-store"),
        )
    return None


def vary_wildcard_rule(facts: ExchangeFacts) -> Optional[Verdict]:
    if not facts.vary_wildcard:
        return None
    return _verdict(
        "vary-wildcard",
        CacheabilitySummary.NOT_CACHEABLE,
        _text(
            "This response includes a `Vary: *` header, which means it varies on "
            "details beyond the request headers, so no future request can ever "
            "be matched against it. Any freshness or validator headers are "
            "irrelevant: it's effectively never cacheable."
        ),
    )


def shared_max_age_rule(facts: ExchangeFacts) -> Optional[Verdict]:
    directives = facts.response_directives
    if directives.s_maxage is None or directives.max_age is not None:
        return None
    return _verdict(
        "s-maxage",
        CacheabilitySummary.NOT_CACHEABLE_BY_PRIVATE_CACHES,
        _text(
            f"This response includes an `s-maxage={directives.s_maxage}` "
            "Cache-Control directive, which applies only to shared caches such "
            "as CDNs and proxies, and has no `max-age` directive for private "
            "caches. It may be stored by shared caches for "
            f"{describe_duration(directives.s_maxage)}, but HTTP clients such "
            "as browsers will not cache it."
        ),
    )


def max_age_rule(facts: ExchangeFacts) -> Optional[Verdict]:
    max_age = facts.response_directives.max_age
    if max_age is None:
        return None
    if max_age == 0:
        primary = _text(
            "This response includes an explicit `max-age=0` Cache-Control "
            "directive, so caches can store it but it is immediately stale, and "
            "must be checked with the server before every reuse."
        )
    else:
        primary = _text(
            f"This response includes an explicit `max-age={max_age}` "
            "Cache-Control directive, so caches can store it and reuse it for "
            f"{describe_duration(max_age)} after it was generated."
        )
    return _verdict(
        "max-age",
        CacheabilitySummary.CACHEABLE,
        primary,
        *evaluate_advisories(facts, MAX_AGE_ADVISORIES),
    )


def expires_rule(facts: ExchangeFacts) -> Optional[Verdict]:
    expires = facts.timestamps.expires
    if expires is None:
        return None
    explanation = (
        "This response includes an Expires header set to "
        f"{format_datetime(expires, usegmt=True)}, so caches can store "
        "it and reuse it until then."
    )
    date = facts.timestamps.date
    if date is not None and expires <= date:
        explanation += (
            " That is not after its Date header, so it is already stale when "
            "received and must be checked with the server before reuse."
        )
    return _verdict(
        "expires",
        CacheabilitySummary.CACHEABLE,
        _text(explanation),
        expires_advisory(),
    )


def status_default_rule(facts: ExchangeFacts) -> Verdict:
    """Fallback when no explicit freshness information is present."""
    status = facts.status_code
    directives = facts.response_directives

    if status in PERMANENTLY_CACHEABLE_STATUSES:
        return _verdict(
            "status-default",
            CacheabilitySummary.CACHEABLE,
            _text(
                f"{status} responses are cacheable by default. This response has "
                "no explicit freshness information, and this status is not "
                "expected to change, so unless told otherwise many clients will "
                "cache it forever."
            ),
        )

    if status not in HEURISTICALLY_CACHEABLE_STATUSES and not directives.public:
        return _verdict(
            "status-default",
            CacheabilitySummary.NOT_CACHEABLE,
            _text(
                f"{status} responses are not cacheable by default, and this "
                "response has no explicit freshness information that would make "
                "it cacheable."
            ),
        )

    reasons = []
    if status in HEURISTICALLY_CACHEABLE_STATUSES:
        reasons.append(f"{status} responses are cacheable by default.")
    if directives.public:
        reasons.append(
            "This response has a `public` Cache-Control directive, which makes "
            "it cacheable."
        )
    opening = " ".join(reasons)

    if directives.public or facts.validators.any:
        return _verdict(
            "status-default",
            CacheabilitySummary.PROBABLY_CACHEABLE,
            _text(
                f"{opening} However, it has no explicit freshness information "
                "(a `max-age` directive or an Expires header), so its expiry "
                "behaviour is not well specified. Caches may store it, and pick "
                "their own heuristic lifetime, typically based on its "
                "Last-Modified date. It's better to add an explicit `max-age` "
                "Cache-Control directive.",
                Severity.WARNING,
            ),
        )
    return _verdict(
        "status-default",
        CacheabilitySummary.TYPICALLY_NOT_CACHEABLE,
        _text(
            f"{opening} However, this response has no explicit freshness "
            "information and no validator headers (ETag or Last-Modified), so "
            "most caches will not store a response like this. To make it "
            "cacheable, add a `max-age` Cache-Control directive, or to make it "
            "explicitly uncacheable, add `no-store`.",
            Severity.WARNING,
        ),
    )


RULES: Tuple[Rule, ...] = (
    non_standard_method_rule,
    cors_preflight_rule,
    post_rule,
    no_store_rule,
    pragma_rule,
    vary_wildcard_rule,
    shared_max_age_rule,
    max_age_rule,
    expires_rule,
)


def decide(facts: ExchangeFacts) -> Verdict:
    """Return the verdict of the first matching rule."""
    for rule in RULES:
        verdict = rule(facts)
        if verdict is not None:
            return verdict
    return status_default_rule(facts)
