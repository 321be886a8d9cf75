from dataclasses import dataclass

from watchconsole.models.account import Account
from watchconsole.models.comment import Comment
from watchconsole.models.watchlist import Watchlist


@dataclass(frozen=True)
class SessionContext:
    """
    The admin operating the console.

    Resolved once when the session starts and read-only afterwards.
    """

    user_id: str
    username: str


@dataclass(frozen=True)
class TitleMetadata:
    """Title lookup result. Only the poster is used by the console."""

    title_id: str
    poster_url: str


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time copy of the console's three collections, in listing order."""

    accounts: tuple[Account, ...] = ()
    watchlists: tuple[Watchlist, ...] = ()
    comments: tuple[Comment, ...] = ()
