"""
Collection search.

Case-insensitive substring filtering over one console collection.
Each section is searched on a single field:

- accounts -> username
- watchlists -> list_name
- comments -> comment
"""

from collections.abc import Sequence
from enum import Enum
from typing import TypeVar

T = TypeVar("T")


class Section(str, Enum):
    """Console sections with a searchable collection."""

    ACCOUNTS = "accounts"
    WATCHLISTS = "watchlists"
    COMMENTS = "comments"


SEARCH_FIELDS: dict[Section, str] = {
    Section.ACCOUNTS: "username",
    Section.WATCHLISTS: "list_name",
    Section.COMMENTS: "comment",
}


def filter_collection(items: Sequence[T], query: str, field: str) -> list[T]:
    """
    Return the items whose field contains query, ignoring case.

    An empty query returns every item. Matches keep their original order.

    Raises:
        AttributeError: If an item has no attribute named field
    """
    if not query:
        return list(items)

    needle = query.casefold()
    return [item for item in items if needle in str(getattr(item, field) or "").casefold()]
