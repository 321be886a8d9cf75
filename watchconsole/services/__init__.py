"""
WatchConsole services.

Loading, enrichment, local state, moderation and search for the admin console.
"""

from watchconsole.services.console import AdminProfile, ConsoleSession, DashboardOverview
from watchconsole.services.enrichment import PosterResolution, enrich_watchlists, resolve_poster
from watchconsole.services.fetch_orchestrator import (
    ListingOutcome,
    Listings,
    fetch_listings,
    settle_listings,
)
from watchconsole.services.moderation import ConfirmGate, ModerationHandler
from watchconsole.services.search import SEARCH_FIELDS, Section, filter_collection
from watchconsole.services.state_store import ConsoleStore

__all__ = [
    # Session
    "AdminProfile",
    "ConsoleSession",
    "DashboardOverview",
    # Fetch
    "ListingOutcome",
    "Listings",
    "fetch_listings",
    "settle_listings",
    # Enrichment
    "PosterResolution",
    "enrich_watchlists",
    "resolve_poster",
    # Local state
    "ConsoleStore",
    # Moderation
    "ConfirmGate",
    "ModerationHandler",
    # Search
    "SEARCH_FIELDS",
    "Section",
    "filter_collection",
]
