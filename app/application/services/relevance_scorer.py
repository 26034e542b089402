"""Relevance scoring for search candidates.

Pure functions over a query and a normalized candidate. Tier weights:
exact title > title prefix > title substring > content-only substring.
Multi-word queries add a per-term bonus so partial matches still rank,
and a small recency bonus breaks ties in favour of newer items.
"""

from __future__ import annotations

from datetime import datetime

from app.application.dtos.search import SearchCandidate
from app.shared.utils.datetime import ensure_utc, utc_now

EXACT_TITLE_WEIGHT = 100.0
TITLE_PREFIX_WEIGHT = 75.0
TITLE_CONTAINS_WEIGHT = 50.0
CONTENT_CONTAINS_WEIGHT = 25.0
TERM_TITLE_BONUS = 10.0
TERM_CONTENT_BONUS = 5.0
MIN_TERM_LENGTH = 2

_SECONDS_PER_DAY = 86_400.0


def normalize_query(query: str) -> str:
    """Trim, collapse inner whitespace and casefold."""
    return " ".join(query.split()).casefold()


def split_terms(query: str) -> tuple[str, ...]:
    """Return distinct normalized words of at least MIN_TERM_LENGTH chars, in query order."""
    terms: list[str] = []
    for word in normalize_query(query).split(" "):
        if len(word) >= MIN_TERM_LENGTH and word not in terms:
            terms.append(word)
    return tuple(terms)


class RelevanceScorer:
    """Scores candidates against a query; returns None for candidates that do not match."""

    def __init__(
        self,
        recency_window_days: int = 365,
        recency_max_bonus: float = 10.0,
    ) -> None:
        if recency_window_days <= 0:
            raise ValueError("recency_window_days must be positive")
        self.recency_window_days = recency_window_days
        self.recency_max_bonus = recency_max_bonus

    def match_score(self, phrase: str, candidate: SearchCandidate) -> float:
        """Text match strength of an already normalized phrase (0 when nothing matches)."""
        title = normalize_query(candidate.title)
        content = normalize_query(candidate.content)
        # Meeting location is matched by the gateway, so it scores like content.
        location = normalize_query(candidate.metadata.get("location") or "")

        score = 0.0
        if title:
            if title == phrase:
                score = EXACT_TITLE_WEIGHT
            elif title.startswith(phrase):
                score = TITLE_PREFIX_WEIGHT
            elif phrase in title:
                score = TITLE_CONTAINS_WEIGHT
        if score == 0.0 and (phrase in content or phrase in location):
            score = CONTENT_CONTAINS_WEIGHT

        terms = split_terms(phrase)
        if len(terms) > 1:
            for term in terms:
                if term in title:
                    score += TERM_TITLE_BONUS
                elif term in content or term in location:
                    score += TERM_CONTENT_BONUS
        return score

    def recency_bonus(self, created: datetime, now: datetime) -> float:
        """Linear decay from recency_max_bonus (brand new) to 0 at recency_window_days."""
        age_days = (now - ensure_utc(created)).total_seconds() / _SECONDS_PER_DAY
        if age_days <= 0:
            return self.recency_max_bonus
        remaining = 1.0 - age_days / self.recency_window_days
        return self.recency_max_bonus * max(0.0, remaining)

    def score(
        self,
        query: str,
        candidate: SearchCandidate,
        now: datetime | None = None,
    ) -> float | None:
        """Return the relevance score, or None when the candidate does not match the query."""
        phrase = normalize_query(query)
        if not phrase:
            return None
        base = self.match_score(phrase, candidate)
        if base <= 0.0:
            return None
        return base + self.recency_bonus(candidate.created_date, ensure_utc(now or utc_now()))
