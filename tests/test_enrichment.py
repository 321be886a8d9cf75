"""Tests for watchlist poster enrichment."""

import asyncio

from watchconsole.config import FALLBACK_POSTER_URL
from watchconsole.models.session import TitleMetadata
from watchconsole.models.watchlist import Watchlist
from watchconsole.services.enrichment import PosterResolution, enrich_watchlists, resolve_poster


class TestResolvePoster:
    async def test_no_titles_uses_fallback_without_lookup(self, make_gateway) -> None:
        """Empty watchlists never trigger a lookup."""
        gateway = make_gateway()

        result = await resolve_poster(gateway, Watchlist(list_id="w1", list_name="Empty"))

        assert result == PosterResolution(poster_url=FALLBACK_POSTER_URL, resolved=False)
        assert gateway.lookups == []

    async def test_looks_up_first_title_only(self, make_gateway) -> None:
        gateway = make_gateway(posters={"t1": "https://img/t1.jpg", "t2": "https://img/t2.jpg"})

        result = await resolve_poster(
            gateway, Watchlist(list_id="w1", list_name="Two", titles=["t1", "t2"])
        )

        assert result == PosterResolution(poster_url="https://img/t1.jpg", resolved=True)
        assert gateway.lookups == ["t1"]

    async def test_lookup_failure_uses_fallback(self, make_gateway) -> None:
        gateway = make_gateway(posters={})

        result = await resolve_poster(
            gateway, Watchlist(list_id="w1", list_name="Broken", titles=["t1"])
        )

        assert result.poster_url == FALLBACK_POSTER_URL
        assert result.resolved is False

    async def test_empty_poster_uses_fallback(self, make_gateway) -> None:
        """A successful lookup without a poster still yields a defined poster."""
        gateway = make_gateway(posters={"t1": ""})

        result = await resolve_poster(
            gateway, Watchlist(list_id="w1", list_name="Blank", titles=["t1"])
        )

        assert result.poster_url == FALLBACK_POSTER_URL


class TestEnrichWatchlists:
    async def test_every_watchlist_gets_a_poster(self, gateway, sample_watchlists) -> None:
        """Resolved, empty and failing watchlists all end with a poster."""
        enriched = await enrich_watchlists(gateway, sample_watchlists)

        assert [w.list_id for w in enriched] == ["w1", "w2", "w3"]
        assert enriched[0].poster_url == "https://img.example.com/t1.jpg"
        assert enriched[1].poster_url == FALLBACK_POSTER_URL
        assert enriched[2].poster_url == FALLBACK_POSTER_URL
        assert all(w.poster_url for w in enriched)

    async def test_one_lookup_per_titled_watchlist(self, gateway, sample_watchlists) -> None:
        await enrich_watchlists(gateway, sample_watchlists)

        assert sorted(gateway.lookups) == ["t1", "t3"]

    async def test_failing_lookup_yields_fallback(self, make_gateway) -> None:
        """Watchlist w1 with a failing lookup for t1 falls back."""
        gateway = make_gateway(posters={})

        enriched = await enrich_watchlists(
            gateway, [Watchlist(list_id="w1", list_name="Lonely", titles=["t1"])]
        )

        assert enriched[0].list_id == "w1"
        assert enriched[0].poster_url == FALLBACK_POSTER_URL

    async def test_does_not_modify_input(self, gateway, sample_watchlists) -> None:
        await enrich_watchlists(gateway, sample_watchlists)

        assert all(w.poster_url is None for w in sample_watchlists)

    async def test_empty_input(self, gateway) -> None:
        assert await enrich_watchlists(gateway, []) == []

    async def test_preserves_order_when_lookups_finish_out_of_order(self, make_gateway) -> None:
        """Results are merged by input position, not completion order."""

        class StaggeredGateway(make_gateway):
            async def get_title_metadata(self, title_id):
                await asyncio.sleep(0.03 if title_id == "slow" else 0)
                return TitleMetadata(title_id=title_id, poster_url=f"https://img/{title_id}.jpg")

        watchlists = [
            Watchlist(list_id="w1", list_name="A", titles=["slow"]),
            Watchlist(list_id="w2", list_name="B", titles=["fast"]),
        ]

        enriched = await enrich_watchlists(StaggeredGateway(), watchlists)

        assert [w.poster_url for w in enriched] == ["https://img/slow.jpg", "https://img/fast.jpg"]

    async def test_respects_concurrency_limit(self, make_gateway) -> None:
        in_flight = 0
        peak = 0

        class TrackingGateway(make_gateway):
            async def get_title_metadata(self, title_id):
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return TitleMetadata(title_id=title_id, poster_url="https://img/x.jpg")

        watchlists = [
            Watchlist(list_id=f"w{i}", list_name=f"L{i}", titles=[f"t{i}"]) for i in range(6)
        ]

        await enrich_watchlists(TrackingGateway(), watchlists, concurrency=2)

        assert peak == 2
