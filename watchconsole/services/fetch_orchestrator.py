"""
Fetch orchestrator.

Issues the three listing calls concurrently and waits for all of them to
settle before deciding anything. Each call's outcome is recorded on its
own, then a single gating rule is applied: the listings are used only if
all three succeeded. A partial result is never returned.
"""

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import Any

from watchconsole.gateway.backend import BackendGateway
from watchconsole.models.account import Account
from watchconsole.models.comment import Comment
from watchconsole.models.failure import FetchError
from watchconsole.models.watchlist import Watchlist

logger = logging.getLogger(__name__)


@dataclass
class ListingOutcome:
    """Settled result of one listing call: either a value or an error."""

    name: str
    value: list[Any] = field(default_factory=list)
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class Listings:
    """Raw collections from a fully successful fetch."""

    accounts: list[Account]
    watchlists: list[Watchlist]
    comments: list[Comment]


async def settle_listings(gateway: BackendGateway) -> list[ListingOutcome]:
    """
    Run the three listing calls concurrently and record how each settled.

    Never raises for a failed listing; failures are captured per call.
    Outcomes are returned in a fixed order: accounts, watchlists, comments.
    """
    calls: dict[str, Awaitable[list[Any]]] = {
        "accounts": gateway.list_accounts(),
        "watchlists": gateway.list_watchlists(),
        "comments": gateway.list_comments(),
    }
    results = await asyncio.gather(*calls.values(), return_exceptions=True)

    outcomes: list[ListingOutcome] = []
    for name, result in zip(calls, results, strict=True):
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, BaseException):
            outcomes.append(ListingOutcome(name=name, error=result))
        else:
            outcomes.append(ListingOutcome(name=name, value=list(result)))
    return outcomes


async def fetch_listings(gateway: BackendGateway) -> Listings:
    """
    Fetch accounts, watchlists and comments as one all-or-nothing unit.

    Args:
        gateway: Backend to list from

    Returns:
        Listings holding all three raw collections

    Raises:
        FetchError: If any listing failed; names every failed listing
    """
    outcomes = await settle_listings(gateway)
    failed = [o for o in outcomes if not o.ok]

    if failed:
        for outcome in failed:
            logger.error("Failed to list %s: %s", outcome.name, outcome.error)
        raise FetchError(
            [o.name for o in failed],
            detail="; ".join(f"{o.name}: {o.error}" for o in failed),
        ) from failed[0].error

    by_name = {o.name: o.value for o in outcomes}
    listings = Listings(
        accounts=by_name["accounts"],
        watchlists=by_name["watchlists"],
        comments=by_name["comments"],
    )
    logger.info(
        "Listed %d accounts, %d watchlists, %d comments",
        len(listings.accounts),
        len(listings.watchlists),
        len(listings.comments),
    )
    return listings
