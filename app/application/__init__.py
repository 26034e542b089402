"""Application layer: DTOs, interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (read gateways, analytics store).
"""

from app.application.interfaces import (
    ISearchAnalytics,
    ISearchGateway,
    ISearchQueryStore,
)
from app.application.services.search_analytics import SearchAnalyticsRecorder
from app.application.use_cases.search import SearchService

__all__ = [
    "ISearchAnalytics",
    "ISearchGateway",
    "ISearchQueryStore",
    "SearchAnalyticsRecorder",
    "SearchService",
]
