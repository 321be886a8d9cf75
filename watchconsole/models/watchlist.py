from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Watchlist:
    """
    A user's watchlist.

    Attributes:
        list_id: Unique watchlist identifier
        list_name: Display name
        user_id: Owner account id
        username: Owner display name
        titles: Title ids in list order; the first one drives the poster
        comments: Comment ids attached to the list
        likes: User ids that liked the list
        collaborators: User ids allowed to edit the list
        is_public: Visibility flag
        poster_url: Thumbnail reference, set by enrichment
    """

    list_id: str
    list_name: str
    user_id: str = ""
    username: str = ""
    titles: list[str] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)
    likes: list[str] = field(default_factory=list)
    collaborators: list[str] = field(default_factory=list)
    is_public: bool = False
    poster_url: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Watchlist":
        """Build a Watchlist from the backend's JSON representation."""
        if not payload.get("listId"):
            raise ValueError("Watchlist payload is missing listId")
        return cls(
            list_id=str(payload["listId"]),
            list_name=payload.get("listName") or "",
            user_id=payload.get("userId") or "",
            username=payload.get("username") or "",
            titles=[str(t) for t in payload.get("titles") or []],
            comments=list(payload.get("comments") or []),
            likes=list(payload.get("likes") or []),
            collaborators=list(payload.get("collaborators") or []),
            is_public=bool(payload.get("isPublic", False)),
        )

    @property
    def first_title(self) -> str | None:
        return self.titles[0] if self.titles else None

    @property
    def title_count(self) -> int:
        return len(self.titles)

    @property
    def comment_count(self) -> int:
        return len(self.comments)

    @property
    def like_count(self) -> int:
        return len(self.likes)

    @property
    def collaborator_count(self) -> int:
        return len(self.collaborators)

    @property
    def visibility(self) -> str:
        return "Public" if self.is_public else "Private"
