"""
Explain whether, why and how confidently a response would be cached.
"""
import logging
from functools import reduce
from typing import Optional

from .parser import interpret_exchange
from .rules import decide
from .types import (
    CacheabilityResult,
    Exchange,
    ExplanationFragment,
    Severity,
    Verdict,
)

logger = logging.getLogger(__name__)

FRAGMENT_SEPARATOR = "\n\n"


def _first_severity(
    severity: Optional[Severity], fragment: ExplanationFragment
) -> Optional[Severity]:
    return severity or fragment.severity


def compose_result(verdict: Verdict) -> CacheabilityResult:
    """Join a verdict's fragments into the final result."""
    explanation = FRAGMENT_SEPARATOR.join(
        " ".join(fragment.text.split()) for fragment in verdict.fragments
    )
    return CacheabilityResult(
        summary=verdict.summary,
        explanation=explanation,
        type=reduce(_first_severity, verdict.fragments, None),
    )


def explain_cacheability(exchange: Exchange) -> CacheabilityResult:
    """
    Explain the cacheability of a single request/response exchange.

    Never raises for malformed headers: anything that can't be parsed is
    treated as absent.

    Example:
        result = explain_cacheability(Exchange.create(
            method="GET",
            status_code=200,
            response_headers={"cache-control": "max-age=60"},
        ))
        result.summary  # CacheabilitySummary.CACHEABLE
        result.type     # Severity.WARNING (no Date header)
    """
    facts = interpret_exchange(exchange)
    verdict = decide(facts)
    result = compose_result(verdict)
    logger.debug(
        f"{facts.method} {facts.status_code}: rule={verdict.rule} "
        f"summary={result.summary.value!r} type={result.type.value if result.type else None}"
    )
    return result
