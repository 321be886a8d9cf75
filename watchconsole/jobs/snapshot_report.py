"""
Console snapshot report.

Runs one initial load against the configured backend and logs what the
console would show. Useful as a smoke check before opening the console.
"""

import asyncio
import logging

import httpx

from watchconsole.config import settings
from watchconsole.gateway.backend import HttpBackendGateway
from watchconsole.models.session import SessionContext
from watchconsole.services.console import ConsoleSession

logger = logging.getLogger(__name__)


async def run_report() -> bool:
    """Load the console snapshot once and log a summary."""
    logger.info("Loading console snapshot from %s...", settings.backend_url)

    async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
        session = ConsoleSession(
            HttpBackendGateway(client=client),
            SessionContext(user_id=settings.admin_user_id, username=settings.admin_username),
        )
        if not await session.load():
            logger.error("Console snapshot could not be loaded")
            return False

    snapshot = session.store.snapshot()
    banned = sum(1 for a in snapshot.accounts if a.is_banned)
    untitled = sum(1 for w in snapshot.watchlists if not w.titles)
    logger.info("Accounts: %d (%d banned)", len(snapshot.accounts), banned)
    logger.info("Watchlists: %d (%d without titles)", len(snapshot.watchlists), untitled)
    logger.info("Comments: %d", len(snapshot.comments))
    return True


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if not asyncio.run(run_report()):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
