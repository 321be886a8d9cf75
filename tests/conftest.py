import asyncio
from datetime import UTC, datetime

import pytest

from watchconsole.gateway.backend import BanStatus
from watchconsole.models.account import Account
from watchconsole.models.comment import Comment
from watchconsole.models.failure import FetchError, MutationError, TitleLookupError
from watchconsole.models.session import TitleMetadata
from watchconsole.models.watchlist import Watchlist


class FakeGateway:
    """In-memory backend that records every call made against it."""

    def __init__(
        self,
        accounts: list[Account] | None = None,
        watchlists: list[Watchlist] | None = None,
        comments: list[Comment] | None = None,
        posters: dict[str, str] | None = None,
    ) -> None:
        self.accounts = accounts or []
        self.watchlists = watchlists or []
        self.comments = comments or []
        self.posters = posters or {}
        self.failing_listings: set[str] = set()
        self.listing_delay = 0.0
        self.fail_mutations = False
        self.lookups: list[str] = []
        self.ban_calls: list[tuple[str, BanStatus]] = []
        self.delete_calls: list[tuple[str, str]] = []

    async def _listing(self, name: str, items: list):
        if self.listing_delay:
            await asyncio.sleep(self.listing_delay)
        if name in self.failing_listings:
            raise FetchError([name], detail="HTTP 500")
        return list(items)

    async def list_accounts(self) -> list[Account]:
        return await self._listing("accounts", self.accounts)

    async def list_watchlists(self) -> list[Watchlist]:
        return await self._listing("watchlists", self.watchlists)

    async def list_comments(self) -> list[Comment]:
        return await self._listing("comments", self.comments)

    async def get_title_metadata(self, title_id: str) -> TitleMetadata:
        self.lookups.append(title_id)
        if title_id not in self.posters:
            raise TitleLookupError(title_id, detail="HTTP 404")
        return TitleMetadata(title_id=title_id, poster_url=self.posters[title_id])

    async def set_ban_status(self, user_id: str, status: BanStatus) -> None:
        self.ban_calls.append((user_id, status))
        if self.fail_mutations:
            raise MutationError("ban", f"account {user_id}", detail="HTTP 500")

    async def delete_comment(self, watchlist_id: str, comment_id: str) -> None:
        self.delete_calls.append((watchlist_id, comment_id))
        if self.fail_mutations:
            raise MutationError("delete", f"comment {comment_id}", detail="HTTP 500")


@pytest.fixture
def sample_accounts() -> list[Account]:
    return [
        Account(user_id="u1", username="Ann", email="ann@example.com", friends=["u2"]),
        Account(
            user_id="u2",
            username="Bob",
            email="bob@example.com",
            signed_url="https://cdn.example.com/bob.jpg",
            is_banned=True,
        ),
        Account(user_id="admin", username="Root", email="root@example.com", is_admin=True),
    ]


@pytest.fixture
def sample_watchlists() -> list[Watchlist]:
    return [
        Watchlist(list_id="w1", list_name="Horror Nights", user_id="u1", titles=["t1", "t2"]),
        Watchlist(list_id="w2", list_name="Empty Shelf", user_id="u2", titles=[]),
        Watchlist(list_id="w3", list_name="Sci-Fi Classics", user_id="u1", titles=["t3"]),
    ]


@pytest.fixture
def sample_comments() -> list[Comment]:
    posted = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
    return [
        Comment(
            comment_id="c1",
            comment="Great picks!",
            date_posted=posted,
            user_id="u2",
            username="Bob",
            watchlist_id="w1",
            watchlist_name="Horror Nights",
        ),
        Comment(
            comment_id="c2",
            comment="Spam spam SPAM",
            date_posted=posted,
            user_id="u1",
            username="Ann",
            watchlist_id="w3",
            watchlist_name="Sci-Fi Classics",
        ),
    ]


@pytest.fixture
def gateway(sample_accounts, sample_watchlists, sample_comments) -> FakeGateway:
    """Backend holding the sample data, with a poster for t1 only."""
    return FakeGateway(
        accounts=sample_accounts,
        watchlists=sample_watchlists,
        comments=sample_comments,
        posters={"t1": "https://img.example.com/t1.jpg"},
    )


@pytest.fixture
def make_gateway() -> type[FakeGateway]:
    """Factory for gateways with custom data."""
    return FakeGateway
