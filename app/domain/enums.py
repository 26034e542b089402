"""Domain enumerations for the MeetMe search service.

Enums represent fixed sets of domain values (searchable entity types,
sort keys, attendance status).
"""

from enum import Enum


class SearchType(str, Enum):
    """Searchable entity type.

    Declaration order is the canonical fan-out and merge order for global search.
    """

    MEETING = "Meeting"
    POST = "Post"
    COMMENT = "Comment"
    USER = "User"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid type names as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [t.value for t in cls]

    @classmethod
    def parse(cls, value: str) -> "SearchType":
        """Return the member whose value matches case-insensitively.

        Raises:
            ValueError: If value names no search type.
        """
        needle = value.strip().lower()
        for member in cls:
            if member.value.lower() == needle:
                return member
        raise ValueError(f"Unknown search type: {value!r}")


class SortBy(str, Enum):
    """Ordering key for search results."""

    RELEVANCE = "Relevance"
    DATE = "Date"
    TITLE = "Title"


class SortDirection(str, Enum):
    """Ordering direction for search results."""

    ASC = "Asc"
    DESC = "Desc"


class AttendanceStatus(str, Enum):
    """Attendance state of a user for a meeting. Only confirmed attendees are counted."""

    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    DECLINED = "Declined"
    CANCELLED = "Cancelled"


# Analytics search_type for cross-type searches; typed searches use SearchType values.
GLOBAL_SEARCH_TYPE = "Global"
