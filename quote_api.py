import logging

from models import FALLBACK_QUOTE, Failed, FailureKind, Fetched, QuoteRecord
from upstream import DEFAULT_TIMEOUT, QUOTE_URL, get_json

logger = logging.getLogger(__name__)

QUOTE_TAGS = ("inspirational", "motivational", "wisdom", "success")

# Reads one required, non-empty string field from the quote payload.
def _text(payload, key):
    value = payload.get(key) if isinstance(payload, dict) else None
    if isinstance(value, str) and value.strip():
        return value
    return None


def lookup_random_quote(session=None, timeout: float = DEFAULT_TIMEOUT, url: str = QUOTE_URL):
    params = {"tags": "|".join(QUOTE_TAGS)}
    outcome = get_json(session, url, params, timeout)
    if not outcome.ok:
        return outcome
    try:
        content = _text(outcome.value, "content")
        author = _text(outcome.value, "author")
    except Exception as e:
        return Failed(FailureKind.MALFORMED, f"unexpected quote payload: {e!r}")
    if content is None or author is None:
        return Failed(FailureKind.MALFORMED, "quote payload missing content or author")
    return Fetched(QuoteRecord(content=content, author=author))

# Returns a random quote, or the fixed fallback quote when the service is unavailable.
def get_random_quote(session=None, timeout: float = DEFAULT_TIMEOUT, url: str = QUOTE_URL) -> QuoteRecord:
    outcome = lookup_random_quote(session, timeout, url)
    if outcome.ok:
        return outcome.value
    logger.warning("Quote lookup failed (%s)", outcome)
    return FALLBACK_QUOTE
