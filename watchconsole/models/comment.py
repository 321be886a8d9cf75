import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Comment:
    """A comment posted on a watchlist."""

    comment_id: str
    comment: str
    date_posted: datetime | None
    user_id: str
    username: str
    watchlist_id: str
    watchlist_name: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Comment":
        """
        Build a Comment from the backend's JSON representation.

        datePosted is an ISO-8601 timestamp; a trailing "Z" is accepted.
        A missing or unreadable date is kept as None so the comment still
        shows up for moderation.

        Raises:
            ValueError: If the id or watchlist is missing
        """
        if not payload.get("commentId"):
            raise ValueError("Comment payload is missing commentId")
        if not payload.get("watchlistId"):
            raise ValueError("Comment payload is missing watchlistId")
        comment_id = str(payload["commentId"])
        return cls(
            comment_id=comment_id,
            comment=payload.get("comment") or "",
            date_posted=_parse_timestamp(comment_id, payload.get("datePosted")),
            user_id=payload.get("userId") or "",
            username=payload.get("username") or "",
            watchlist_id=str(payload["watchlistId"]),
            watchlist_name=payload.get("watchlistName") or "",
        )


def _parse_timestamp(comment_id: str, value: Any) -> datetime | None:
    if not value:
        logger.warning("Comment %s has no datePosted", comment_id)
        return None
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.warning("Comment %s has an unreadable datePosted: %r", comment_id, value)
        return None
