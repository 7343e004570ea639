"""
Advisories: recommendations appended after a baseline verdict.

Each advisory looks at the exchange facts and either returns a fragment or
None. Advisories never change the verdict's summary.
"""
from typing import Callable, Optional, Sequence, Tuple

from .types import ExchangeFacts, ExplanationFragment, Severity

ONE_YEAR_SECONDS = 31536000

Advisory = Callable[[ExchangeFacts], Optional[ExplanationFragment]]


def missing_date_advisory(facts: ExchangeFacts) -> Optional[ExplanationFragment]:
    if facts.timestamps.date is not None:
        return None
    return ExplanationFragment(
        "This response does not include a Date header. Freshness is calculated "
        "relative to the Date header, so without it clients have to guess when "
        "the response was generated, and may treat it as fresh for longer or "
        "shorter than intended. It's strongly recommended to include a Date "
        "header in every cacheable response.",
        Severity.WARNING,
    )


def immutable_advisory(facts: ExchangeFacts) -> Optional[ExplanationFragment]:
    directives = facts.response_directives
    if directives.max_age is None or directives.max_age < ONE_YEAR_SECONDS:
        return None
    if directives.immutable:
        return None
    return ExplanationFragment(
        "This response is cacheable for at least a year. If its content at this "
        "URL will never change, consider adding the `immutable` directive, so "
        "that browsers don't revalidate it when the user reloads the page.",
        Severity.SUGGESTION,
    )


def missing_validator_advisory(facts: ExchangeFacts) -> Optional[ExplanationFragment]:
    if facts.validators.any:
        return None
    return ExplanationFragment(
        "This response has no ETag or Last-Modified header. Adding an ETag "
        "would let caches cheaply check whether a stale copy is still current "
        "once it expires, instead of downloading the whole response again.",
        Severity.SUGGESTION,
    )


# Order matters: the first severity-bearing fragment sets the result type.
MAX_AGE_ADVISORIES: Tuple[Advisory, ...] = (
    missing_date_advisory,
    immutable_advisory,
    missing_validator_advisory,
)


def evaluate_advisories(
    facts: ExchangeFacts, advisories: Sequence[Advisory]
) -> Tuple[ExplanationFragment, ...]:
    """Run every advisory in order, keeping the fragments that fired."""
    fragments = (advisory(facts) for advisory in advisories)
    return tuple(fragment for fragment in fragments if fragment is not None)


def pragma_advisory(directive: str) -> ExplanationFragment:
    return ExplanationFragment(
        "Pragma is a legacy HTTP/1.0 header, kept only for backward "
        "compatibility and not reliably supported by modern caches. It's better "
        f"to use the equivalent `{directive}` directive in a Cache-Control "
        "header instead.",
        Severity.SUGGESTION,
    )


def expires_advisory() -> ExplanationFragment:
    return ExplanationFragment(
        "The Expires header is a legacy mechanism, and because it's an absolute "
        "date its meaning depends on the client's clock matching the server's. "
        "It's better to use a `max-age` Cache-Control directive instead, which "
        "sets a lifetime relative to when the response was generated.",
        Severity.SUGGESTION,
    )
