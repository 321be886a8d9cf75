"""
Console session.

One session per operator: it owns the store, the moderation handler and
the acting admin's SessionContext. The initial load runs the fetch,
waits for it to settle, enriches the watchlists and installs the result
in one replace_all. After that the snapshot only changes through
moderation actions.
"""

import asyncio
import logging
from dataclasses import dataclass

from watchconsole.config import (
    DASHBOARD_ACCOUNT_PREVIEW,
    DASHBOARD_COMMENT_PREVIEW,
    DASHBOARD_WATCHLIST_PREVIEW,
    DEFAULT_PROFILE_IMAGE_URL,
)
from watchconsole.gateway.backend import BackendGateway
from watchconsole.models.account import Account
from watchconsole.models.comment import Comment
from watchconsole.models.failure import FetchError, SessionAlreadyLoadedError
from watchconsole.models.session import SessionContext
from watchconsole.models.watchlist import Watchlist
from watchconsole.services.enrichment import enrich_watchlists
from watchconsole.services.fetch_orchestrator import fetch_listings
from watchconsole.services.moderation import ModerationHandler
from watchconsole.services.search import SEARCH_FIELDS, Section, filter_collection
from watchconsole.services.state_store import ConsoleStore

logger = logging.getLogger(__name__)


@dataclass
class DashboardOverview:
    """Leading slice of each collection shown on the dashboard."""

    accounts: list[Account]
    watchlists: list[Watchlist]
    comments: list[Comment]


@dataclass
class AdminProfile:
    """The acting admin as shown in the console header."""

    user_id: str
    username: str
    profile_image_url: str


class ConsoleSession:
    """Console state and actions for one operator."""

    def __init__(
        self,
        gateway: BackendGateway,
        context: SessionContext,
        store: ConsoleStore | None = None,
        enrichment_concurrency: int | None = None,
    ) -> None:
        self.gateway = gateway
        self.context = context
        self.store = store if store is not None else ConsoleStore()
        self.enrichment_concurrency = enrichment_concurrency
        self.moderation = ModerationHandler(gateway, self.store)
        self.last_load_error: FetchError | None = None
        self._load_lock = asyncio.Lock()

    async def load(self) -> bool:
        """
        Run the initial load.

        Returns:
            True if the snapshot was installed, False if a listing failed.
            On failure the store is left untouched, the error is kept in
            last_load_error and nothing is retried. Overlapping calls are
            serialized, so only one of them installs a snapshot.

        Raises:
            SessionAlreadyLoadedError: If the snapshot was already installed
        """
        async with self._load_lock:
            if self.store.is_loaded:
                raise SessionAlreadyLoadedError()

            try:
                listings = await fetch_listings(self.gateway)
            except FetchError as e:
                logger.error("Error fetching console data: %s", e.message)
                self.last_load_error = e
                return False

            watchlists = await enrich_watchlists(
                self.gateway,
                listings.watchlists,
                concurrency=self.enrichment_concurrency,
            )
            self.store.replace_all(listings.accounts, watchlists, listings.comments)
            self.last_load_error = None
        logger.info("Console snapshot loaded for %s", self.context.username or self.context.user_id)
        return True

    def search(
        self, section: Section, query: str = ""
    ) -> list[Account] | list[Watchlist] | list[Comment]:
        """Filter one section's collection by the operator's search query."""
        field = SEARCH_FIELDS[section]
        if section is Section.ACCOUNTS:
            return filter_collection(self.store.accounts, query, field)
        if section is Section.WATCHLISTS:
            return filter_collection(self.store.watchlists, query, field)
        return filter_collection(self.store.comments, query, field)

    def overview(self) -> DashboardOverview:
        return DashboardOverview(
            accounts=self.store.accounts[:DASHBOARD_ACCOUNT_PREVIEW],
            watchlists=self.store.watchlists[:DASHBOARD_WATCHLIST_PREVIEW],
            comments=self.store.comments[:DASHBOARD_COMMENT_PREVIEW],
        )

    def admin_profile(self) -> AdminProfile:
        """
        Profile of the acting admin.

        Falls back to the default picture when the admin is missing from
        the snapshot or has no image.
        """
        account = self.store.get_account(self.context.user_id)
        return AdminProfile(
            user_id=self.context.user_id,
            username=self.context.username,
            profile_image_url=(
                account.profile_image_url if account is not None else DEFAULT_PROFILE_IMAGE_URL
            ),
        )
