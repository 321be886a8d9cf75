"""
Backend gateway.

The console reaches the movie-watchlist backend only through the six
operations of BackendGateway. HttpBackendGateway implements them over
httpx and maps every transport, HTTP-status and payload failure onto
the console's failure taxonomy:

- listing calls raise FetchError
- title lookups raise TitleLookupError
- moderation calls raise MutationError
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any, Literal, Protocol, TypeVar
from urllib.parse import quote

import httpx

from watchconsole.config import settings
from watchconsole.models.account import Account
from watchconsole.models.comment import Comment
from watchconsole.models.failure import FetchError, MutationError, TitleLookupError
from watchconsole.models.session import TitleMetadata
from watchconsole.models.watchlist import Watchlist

logger = logging.getLogger(__name__)

BanStatus = Literal["banned", "unbanned"]

USER_AGENT = "WatchConsole/1.0"

ACCOUNTS_PATH = "/users"
WATCHLISTS_PATH = "/watchlists/admin"
COMMENTS_PATH = "/watchlists/comments"
TITLE_PATH = "/watchmode/title/{title_id}"
BAN_PATH = "/users/{user_id}/ban"
COMMENT_PATH = "/watchlists/{watchlist_id}/comments/{comment_id}"

T = TypeVar("T")


def _segment(value: str) -> str:
    """Percent-encode an identifier for use as a single path segment."""
    return quote(str(value), safe="")


class BackendGateway(Protocol):
    async def list_accounts(self) -> list[Account]: ...

    async def list_watchlists(self) -> list[Watchlist]: ...

    async def list_comments(self) -> list[Comment]: ...

    async def get_title_metadata(self, title_id: str) -> TitleMetadata: ...

    async def set_ban_status(self, user_id: str, status: BanStatus) -> None: ...

    async def delete_comment(self, watchlist_id: str, comment_id: str) -> None: ...


class HttpBackendGateway:
    """
    HTTP client for the watchlist backend.

    A shared httpx.AsyncClient may be passed in for connection reuse;
    otherwise a short-lived client is opened per request.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            base_url: Backend base URL. Defaults to settings.backend_url.
            token: Bearer token sent with every request. Defaults to settings.backend_token.
            timeout: Request timeout in seconds. Defaults to settings.request_timeout.
            client: Optional httpx client for connection reuse
        """
        self.base_url = (base_url or settings.backend_url).rstrip("/")
        self.token = settings.backend_token if token is None else token
        self.timeout = settings.request_timeout if timeout is None else timeout
        self._client = client

    @property
    def headers(self) -> dict[str, str]:
        headers = {"User-Agent": USER_AGENT}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s", method, path)
        async with self._session() as client:
            response = await client.request(
                method,
                f"{self.base_url}{path}",
                headers=self.headers,
                **kwargs,
            )
            response.raise_for_status()
            return response

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------

    async def _list(
        self,
        name: str,
        path: str,
        parse: Callable[[dict[str, Any]], T],
    ) -> list[T]:
        try:
            response = await self._request("GET", path)
            payload = response.json()
            if not isinstance(payload, list):
                raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
            if not all(isinstance(item, dict) for item in payload):
                raise ValueError("expected an array of objects")
            return [parse(item) for item in payload]
        except httpx.HTTPStatusError as e:
            raise FetchError([name], detail=f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise FetchError([name], detail=str(e)) from e
        except ValueError as e:
            raise FetchError([name], detail=f"Malformed {name} payload: {e}") from e

    async def list_accounts(self) -> list[Account]:
        return await self._list("accounts", ACCOUNTS_PATH, Account.from_payload)

    async def list_watchlists(self) -> list[Watchlist]:
        return await self._list("watchlists", WATCHLISTS_PATH, Watchlist.from_payload)

    async def list_comments(self) -> list[Comment]:
        return await self._list("comments", COMMENTS_PATH, Comment.from_payload)

    # -------------------------------------------------------------------------
    # Title metadata
    # -------------------------------------------------------------------------

    async def get_title_metadata(self, title_id: str) -> TitleMetadata:
        """
        Look up a title's metadata.

        Args:
            title_id: Title identifier

        Returns:
            TitleMetadata with the poster reference (may be empty)

        Raises:
            TitleLookupError: If the title is unknown or the request fails
        """
        try:
            path = TITLE_PATH.format(title_id=_segment(title_id))
            response = await self._request("GET", path)
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise TitleLookupError(title_id, detail=f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise TitleLookupError(title_id, detail=str(e)) from e
        except httpx.InvalidURL as e:
            raise TitleLookupError(title_id, detail=f"Invalid title id: {e}") from e
        except ValueError as e:
            raise TitleLookupError(title_id, detail=f"Malformed response: {e}") from e

        if not isinstance(data, dict):
            raise TitleLookupError(title_id, detail="Malformed response: expected an object")

        return TitleMetadata(title_id=title_id, poster_url=data.get("poster") or "")

    # -------------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------------

    async def set_ban_status(self, user_id: str, status: BanStatus) -> None:
        """
        Set an account's ban status.

        Raises:
            MutationError: If the backend rejects the change or is unreachable
        """
        action = "ban" if status == "banned" else "unban"
        path = BAN_PATH.format(user_id=_segment(user_id))
        try:
            await self._request("PUT", path, json={"status": status})
        except httpx.HTTPStatusError as e:
            raise MutationError(
                action, f"account {user_id}", detail=f"HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise MutationError(action, f"account {user_id}", detail=str(e)) from e
        except httpx.InvalidURL as e:
            raise MutationError(action, f"account {user_id}", detail=f"Invalid id: {e}") from e

    async def delete_comment(self, watchlist_id: str, comment_id: str) -> None:
        """
        Delete a comment from a watchlist.

        Raises:
            MutationError: If the backend rejects the deletion or is unreachable
        """
        path = COMMENT_PATH.format(
            watchlist_id=_segment(watchlist_id), comment_id=_segment(comment_id)
        )
        try:
            await self._request("DELETE", path)
        except httpx.HTTPStatusError as e:
            raise MutationError(
                "delete", f"comment {comment_id}", detail=f"HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise MutationError("delete", f"comment {comment_id}", detail=str(e)) from e
        except httpx.InvalidURL as e:
            raise MutationError(
                "delete", f"comment {comment_id}", detail=f"Invalid id: {e}"
            ) from e
