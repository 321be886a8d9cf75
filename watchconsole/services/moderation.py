"""
Moderation actions.

Ban toggling and comment deletion are applied at the backend first.
The local store is patched only after the backend confirms; a failed
call leaves it exactly as it was and the MutationError reaches the
caller so the operator can be told.
"""

import logging
from collections.abc import Callable

from watchconsole.gateway.backend import BackendGateway, BanStatus
from watchconsole.models.comment import Comment
from watchconsole.models.failure import ModerationRefusedError, MutationError
from watchconsole.services.state_store import ConsoleStore

logger = logging.getLogger(__name__)

# Yes/no gate asked before a comment is deleted. Receives the comment
# when it is present in the store, None otherwise.
ConfirmGate = Callable[[Comment | None], bool]


class ModerationHandler:
    """Runs moderation actions against the backend and mirrors them locally."""

    def __init__(self, gateway: BackendGateway, store: ConsoleStore) -> None:
        self.gateway = gateway
        self.store = store

    async def set_ban(self, user_id: str, currently_banned: bool) -> bool:
        """
        Toggle an account's ban status.

        Args:
            user_id: Account to toggle
            currently_banned: The ban state the operator sees now; the
                backend is asked for the opposite

        Returns:
            The new ban state

        Raises:
            ModerationRefusedError: If the account is an admin
            MutationError: If the backend call failed; local state is unchanged
        """
        account = self.store.get_account(user_id)
        if account is not None and account.is_admin:
            raise ModerationRefusedError(user_id, "admin accounts cannot be banned")

        target = not currently_banned
        status: BanStatus = "banned" if target else "unbanned"

        try:
            await self.gateway.set_ban_status(user_id, status)
        except MutationError as e:
            logger.error("Failed to toggle ban for %s: %s", user_id, e.detail or e.message)
            raise

        self.store.patch_account_ban(user_id, target)
        logger.info("Account %s %s", user_id, status)
        return target

    async def delete_comment(
        self,
        watchlist_id: str,
        comment_id: str,
        confirm: ConfirmGate,
    ) -> bool:
        """
        Delete a comment after the operator confirms.

        Args:
            watchlist_id: Watchlist the comment is attached to
            comment_id: Comment to delete
            confirm: Yes/no gate; nothing happens unless it returns True

        Returns:
            True if the comment was deleted, False if the operator declined

        Raises:
            MutationError: If the backend call failed; local state is unchanged
        """
        if not confirm(self.store.get_comment(comment_id)):
            logger.debug("Deletion of comment %s not confirmed", comment_id)
            return False

        try:
            await self.gateway.delete_comment(watchlist_id, comment_id)
        except MutationError as e:
            logger.error("Failed to delete comment %s: %s", comment_id, e.detail or e.message)
            raise

        self.store.remove_comment(comment_id)
        logger.info("Comment %s deleted from watchlist %s", comment_id, watchlist_id)
        return True
