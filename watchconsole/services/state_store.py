"""
Local state store.

Holds the console's snapshot of accounts, watchlists and comments, keyed
by id and kept in listing order. After the initial load the store only
changes through two point mutations: patching an account's ban flag and
removing a comment. Each mutation is a single assignment, so readers
never see a half-applied update.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import TypeVar

from watchconsole.models.account import Account
from watchconsole.models.comment import Comment
from watchconsole.models.session import Snapshot
from watchconsole.models.watchlist import Watchlist

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _index(kind: str, items: Iterable[T], key: Callable[[T], str]) -> dict[str, T]:
    """Index items by id, keeping the first occurrence of a duplicate id."""
    indexed: dict[str, T] = {}
    for item in items:
        item_id = key(item)
        if item_id in indexed:
            logger.warning("Duplicate %s id %s in listing, keeping first", kind, item_id)
            continue
        indexed[item_id] = item
    return indexed


class ConsoleStore:
    """In-memory snapshot owned by one console session."""

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}
        self._watchlists: dict[str, Watchlist] = {}
        self._comments: dict[str, Comment] = {}
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def accounts(self) -> list[Account]:
        return list(self._accounts.values())

    @property
    def watchlists(self) -> list[Watchlist]:
        return list(self._watchlists.values())

    @property
    def comments(self) -> list[Comment]:
        return list(self._comments.values())

    def get_account(self, user_id: str) -> Account | None:
        return self._accounts.get(user_id)

    def get_watchlist(self, list_id: str) -> Watchlist | None:
        return self._watchlists.get(list_id)

    def get_comment(self, comment_id: str) -> Comment | None:
        return self._comments.get(comment_id)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            accounts=tuple(self._accounts.values()),
            watchlists=tuple(self._watchlists.values()),
            comments=tuple(self._comments.values()),
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def replace_all(
        self,
        accounts: Iterable[Account],
        watchlists: Iterable[Watchlist],
        comments: Iterable[Comment],
    ) -> None:
        """
        Replace the whole snapshot.

        The new mappings are built before any of them is installed, so a
        malformed input leaves the previous snapshot in place.
        """
        new_accounts = _index("account", accounts, lambda a: a.user_id)
        new_watchlists = _index("watchlist", watchlists, lambda w: w.list_id)
        new_comments = _index("comment", comments, lambda c: c.comment_id)

        self._accounts, self._watchlists, self._comments = (
            new_accounts,
            new_watchlists,
            new_comments,
        )
        self._loaded = True

    def patch_account_ban(self, user_id: str, banned: bool) -> bool:
        """
        Set one account's is_banned flag.

        Returns:
            True if the account was found, False if this was a no-op
        """
        account = self._accounts.get(user_id)
        if account is None:
            logger.debug("Ban patch for unknown account %s ignored", user_id)
            return False
        self._accounts[user_id] = replace(account, is_banned=banned)
        return True

    def remove_comment(self, comment_id: str) -> bool:
        """
        Remove one comment.

        Returns:
            True if the comment was removed, False if it was not present
        """
        if self._comments.pop(comment_id, None) is None:
            logger.debug("Removal of unknown comment %s ignored", comment_id)
            return False
        return True
