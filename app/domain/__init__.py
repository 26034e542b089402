"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import (
    GLOBAL_SEARCH_TYPE,
    AttendanceStatus,
    SearchType,
    SortBy,
    SortDirection,
)
from app.domain.exceptions import (
    MeetMeException,
    SearchCancelledException,
    SearchFailedException,
    SearchTimeoutException,
    SqlNotConfiguredException,
    ValidationException,
)

__all__ = [
    # Enums
    "GLOBAL_SEARCH_TYPE",
    "AttendanceStatus",
    "SearchType",
    "SortBy",
    "SortDirection",
    # Exceptions
    "MeetMeException",
    "SearchCancelledException",
    "SearchFailedException",
    "SearchTimeoutException",
    "SqlNotConfiguredException",
    "ValidationException",
]
