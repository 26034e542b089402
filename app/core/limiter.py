"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Central limit strings and decorators
keep rate limits DRY.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)

SUGGESTIONS_LIMIT = "120/minute"


def _search_limit() -> str:
    """Search limit from settings, resolved per request (SEARCH_RATE_LIMIT)."""
    return get_settings().search_rate_limit


limit_search = limiter.limit(_search_limit)
limit_suggestions = limiter.limit(SUGGESTIONS_LIMIT)
