"""
Watchlist poster enrichment.

Every watchlist gets a poster_url. The first title of the list is looked
up and its poster used; a list without titles, a failed lookup, or a
lookup that returns no poster all fall back to FALLBACK_POSTER_URL.

Lookups run concurrently across watchlists, bounded by a semaphore.
A failing lookup only affects its own watchlist.
"""

import asyncio
import logging
from dataclasses import dataclass, replace

from watchconsole.config import FALLBACK_POSTER_URL, settings
from watchconsole.gateway.backend import BackendGateway
from watchconsole.models.failure import TitleLookupError
from watchconsole.models.watchlist import Watchlist

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PosterResolution:
    """
    Poster chosen for one watchlist.

    resolved is False when the fallback poster was used.
    """

    poster_url: str
    resolved: bool

    @classmethod
    def fallback(cls) -> "PosterResolution":
        return cls(poster_url=FALLBACK_POSTER_URL, resolved=False)


async def resolve_poster(gateway: BackendGateway, watchlist: Watchlist) -> PosterResolution:
    """
    Resolve the poster for a single watchlist.

    No lookup is issued for a watchlist without titles.
    Lookup failures are logged and turned into the fallback poster.
    """
    title_id = watchlist.first_title
    if title_id is None:
        return PosterResolution.fallback()

    try:
        metadata = await gateway.get_title_metadata(title_id)
    except TitleLookupError as e:
        logger.warning(
            "Failed to fetch title %s for watchlist %s: %s",
            title_id,
            watchlist.list_id,
            e.detail or e.message,
        )
        return PosterResolution.fallback()

    if not metadata.poster_url:
        logger.warning("Title %s has no poster, using fallback", title_id)
        return PosterResolution.fallback()

    return PosterResolution(poster_url=metadata.poster_url, resolved=True)


async def enrich_watchlists(
    gateway: BackendGateway,
    watchlists: list[Watchlist],
    concurrency: int | None = None,
) -> list[Watchlist]:
    """
    Attach a poster_url to every watchlist.

    Args:
        gateway: Backend providing title metadata
        watchlists: Raw watchlists from the listing call
        concurrency: Maximum lookups in flight. Defaults to settings.enrichment_concurrency.

    Returns:
        New Watchlist records in the same order as the input, each with a
        non-empty poster_url. The input records are not modified.
    """
    if not watchlists:
        return []

    limit = max(1, concurrency if concurrency is not None else settings.enrichment_concurrency)
    semaphore = asyncio.Semaphore(limit)

    async def _bounded(watchlist: Watchlist) -> PosterResolution:
        async with semaphore:
            return await resolve_poster(gateway, watchlist)

    # gather keeps input order, so results line up with watchlists by index
    resolutions = await asyncio.gather(*[_bounded(w) for w in watchlists])

    fallback_count = sum(1 for r in resolutions if not r.resolved)
    if fallback_count:
        logger.info("Used fallback poster for %d of %d watchlists", fallback_count, len(watchlists))

    return [
        replace(watchlist, poster_url=resolution.poster_url)
        for watchlist, resolution in zip(watchlists, resolutions, strict=True)
    ]
