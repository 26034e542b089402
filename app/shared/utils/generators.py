"""ID generators. Primary keys for users, meetings, posts, comments and search queries are CUID2."""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new collision-resistant CUID2 string."""
    return str(_next_cuid())
