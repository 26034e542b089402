"""Application services: relevance scoring, normalization, analytics, suggestions."""

from app.application.services.relevance_scorer import (
    RelevanceScorer,
    normalize_query,
    split_terms,
)
from app.application.services.search_analytics import (
    SearchAnalyticsRecorder,
    TermFrequency,
    aggregate_terms,
)
from app.application.services.suggestion_engine import (
    SuggestionEngine,
    rank_suggestions,
)

__all__ = [
    "RelevanceScorer",
    "SearchAnalyticsRecorder",
    "SuggestionEngine",
    "TermFrequency",
    "aggregate_terms",
    "normalize_query",
    "rank_suggestions",
    "split_terms",
]
