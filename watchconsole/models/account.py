from dataclasses import dataclass, field
from typing import Any

from watchconsole.config import DEFAULT_PROFILE_IMAGE_URL


@dataclass(frozen=True)
class Account:
    """
    A user account as listed by the backend.

    Attributes:
        user_id: Unique account identifier
        username: Display name
        email: Contact address
        biography: Free-text profile bio (may be empty)
        preferred_genres: Genres in the order the user picked them
        friends: Friend user ids (only the count is displayed)
        signed_url: Profile image reference, empty if none uploaded
        is_banned: Whether the account is currently banned
        is_admin: Whether the account has admin rights
    """

    user_id: str
    username: str
    email: str = ""
    biography: str = ""
    preferred_genres: list[str] = field(default_factory=list)
    friends: list[str] = field(default_factory=list)
    signed_url: str = ""
    is_banned: bool = False
    is_admin: bool = False

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Account":
        """Build an Account from the backend's JSON representation."""
        if not payload.get("userId"):
            raise ValueError("Account payload is missing userId")
        return cls(
            user_id=str(payload["userId"]),
            username=payload.get("username") or "",
            email=payload.get("email") or "",
            biography=payload.get("biography") or "",
            preferred_genres=list(payload.get("preferredGenres") or []),
            friends=list(payload.get("friends") or []),
            signed_url=payload.get("signedUrl") or "",
            is_banned=bool(payload.get("isBanned", False)),
            is_admin=bool(payload.get("isAdmin", False)),
        )

    @property
    def friend_count(self) -> int:
        return len(self.friends)

    @property
    def profile_image_url(self) -> str:
        """Signed image URL, or the default profile picture."""
        return self.signed_url or DEFAULT_PROFILE_IMAGE_URL
