"""Application use cases: one entry point per workflow."""

from app.application.use_cases.search import SearchService, sort_results

__all__ = [
    "SearchService",
    "sort_results",
]
