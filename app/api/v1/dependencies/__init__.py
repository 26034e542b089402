"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the search use case and the analytics
recorder. Routes depend only on these dependencies, not on infra directly.
"""

from app.api.v1.dependencies.search import get_search_analytics, get_search_service

__all__ = [
    "get_search_analytics",
    "get_search_service",
]
