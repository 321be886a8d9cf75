"""
Console API endpoints.

Read-only projections of the session snapshot plus the two moderation
actions. Search happens over the in-memory snapshot; nothing here
triggers a re-fetch.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel, Field

from watchconsole.models.account import Account
from watchconsole.models.comment import Comment
from watchconsole.models.failure import ConfirmationRequiredError, FetchError
from watchconsole.models.watchlist import Watchlist
from watchconsole.services.console import ConsoleSession
from watchconsole.services.search import Section

router = APIRouter(prefix="/console", tags=["console"])


def get_console_session(request: Request) -> ConsoleSession:
    """Console session created at application startup."""
    return request.app.state.console


SessionDep = Annotated[ConsoleSession, Depends(get_console_session)]
QueryParam = Annotated[str, Query(alias="q", description="Case-insensitive substring filter")]


class AccountResponse(BaseModel):
    """Account as shown in the console."""

    user_id: str
    username: str
    email: str
    biography: str
    preferred_genres: list[str] = Field(default_factory=list)
    friend_count: int = 0
    profile_image_url: str
    is_banned: bool
    is_admin: bool

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(
            user_id=account.user_id,
            username=account.username,
            email=account.email,
            biography=account.biography,
            preferred_genres=account.preferred_genres,
            friend_count=account.friend_count,
            profile_image_url=account.profile_image_url,
            is_banned=account.is_banned,
            is_admin=account.is_admin,
        )


class WatchlistResponse(BaseModel):
    """Watchlist as shown in the console."""

    list_id: str
    list_name: str
    user_id: str
    username: str
    poster_url: str | None = None
    title_count: int = 0
    comment_count: int = 0
    like_count: int = 0
    collaborator_count: int = 0
    visibility: str

    @classmethod
    def from_watchlist(cls, watchlist: Watchlist) -> "WatchlistResponse":
        return cls(
            list_id=watchlist.list_id,
            list_name=watchlist.list_name,
            user_id=watchlist.user_id,
            username=watchlist.username,
            poster_url=watchlist.poster_url,
            title_count=watchlist.title_count,
            comment_count=watchlist.comment_count,
            like_count=watchlist.like_count,
            collaborator_count=watchlist.collaborator_count,
            visibility=watchlist.visibility,
        )


class CommentResponse(BaseModel):
    """Comment as shown in the console."""

    comment_id: str
    comment: str
    date_posted: datetime | None = None
    user_id: str
    username: str
    watchlist_id: str
    watchlist_name: str

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentResponse":
        return cls(
            comment_id=comment.comment_id,
            comment=comment.comment,
            date_posted=comment.date_posted,
            user_id=comment.user_id,
            username=comment.username,
            watchlist_id=comment.watchlist_id,
            watchlist_name=comment.watchlist_name,
        )


class AdminProfileResponse(BaseModel):
    user_id: str
    username: str
    profile_image_url: str


class OverviewResponse(BaseModel):
    """Dashboard preview of each collection plus the acting admin."""

    loaded: bool
    admin: AdminProfileResponse
    accounts: list[AccountResponse] = Field(default_factory=list)
    watchlists: list[WatchlistResponse] = Field(default_factory=list)
    comments: list[CommentResponse] = Field(default_factory=list)


class BanRequest(BaseModel):
    currently_banned: bool = Field(
        ...,
        description="Ban state the operator currently sees; the opposite is applied",
    )


class DeleteResponse(BaseModel):
    comment_id: str
    deleted: bool


class LoadResponse(BaseModel):
    loaded: bool
    accounts: int = 0
    watchlists: int = 0
    comments: int = 0


@router.get("/overview", response_model=OverviewResponse)
async def get_overview(session: SessionDep) -> OverviewResponse:
    """Dashboard landing view."""
    overview = session.overview()
    profile = session.admin_profile()
    return OverviewResponse(
        loaded=session.store.is_loaded,
        admin=AdminProfileResponse(
            user_id=profile.user_id,
            username=profile.username,
            profile_image_url=profile.profile_image_url,
        ),
        accounts=[AccountResponse.from_account(a) for a in overview.accounts],
        watchlists=[WatchlistResponse.from_watchlist(w) for w in overview.watchlists],
        comments=[CommentResponse.from_comment(c) for c in overview.comments],
    )


@router.post("/load", response_model=LoadResponse)
async def load_console(session: SessionDep) -> LoadResponse:
    """
    Run the initial load on operator request.

    Returns 502 if a listing failed and 409 once the snapshot exists.
    """
    if not await session.load():
        raise session.last_load_error or FetchError([], detail="Initial load failed")
    snapshot = session.store.snapshot()
    return LoadResponse(
        loaded=True,
        accounts=len(snapshot.accounts),
        watchlists=len(snapshot.watchlists),
        comments=len(snapshot.comments),
    )


@router.get("/accounts", response_model=list[AccountResponse])
async def list_accounts(session: SessionDep, query: QueryParam = "") -> list[AccountResponse]:
    """Accounts whose username contains the query."""
    return [AccountResponse.from_account(a) for a in session.search(Section.ACCOUNTS, query)]


@router.get("/accounts/{user_id}", response_model=AccountResponse)
async def get_account(user_id: str, session: SessionDep) -> AccountResponse:
    account = session.store.get_account(user_id)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Account {user_id} not found",
        )
    return AccountResponse.from_account(account)


@router.post("/accounts/{user_id}/ban", response_model=AccountResponse)
async def toggle_ban(user_id: str, request: BanRequest, session: SessionDep) -> AccountResponse:
    """
    Toggle an account's ban status.

    The store is patched only after the backend accepts the change.
    """
    banned = await session.moderation.set_ban(user_id, request.currently_banned)
    account = session.store.get_account(user_id)
    if account is None:
        # Backend accepted the change for an account outside the snapshot
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Account {user_id} is {'banned' if banned else 'unbanned'} "
            "but not present in the console snapshot",
        )
    return AccountResponse.from_account(account)


@router.get("/watchlists", response_model=list[WatchlistResponse])
async def list_watchlists(session: SessionDep, query: QueryParam = "") -> list[WatchlistResponse]:
    """Watchlists whose name contains the query."""
    return [WatchlistResponse.from_watchlist(w) for w in session.search(Section.WATCHLISTS, query)]


@router.get("/comments", response_model=list[CommentResponse])
async def list_comments(session: SessionDep, query: QueryParam = "") -> list[CommentResponse]:
    """Comments whose text contains the query."""
    return [CommentResponse.from_comment(c) for c in session.search(Section.COMMENTS, query)]


@router.delete(
    "/watchlists/{watchlist_id}/comments/{comment_id}",
    response_model=DeleteResponse,
)
async def delete_comment(
    watchlist_id: str,
    comment_id: str,
    session: SessionDep,
    confirm: Annotated[bool, Query(description="Operator confirmed the deletion")] = False,
) -> DeleteResponse:
    """
    Delete a comment.

    The confirm flag is the operator's yes/no answer; without it nothing is sent.
    """
    deleted = await session.moderation.delete_comment(
        watchlist_id,
        comment_id,
        confirm=lambda _comment: confirm,
    )
    if not deleted:
        raise ConfirmationRequiredError("delete this comment")
    return DeleteResponse(comment_id=comment_id, deleted=True)
