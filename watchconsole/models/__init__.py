from watchconsole.models.account import Account
from watchconsole.models.comment import Comment
from watchconsole.models.failure import (
    ConfirmationRequiredError,
    FailureDetail,
    FailureKind,
    FetchError,
    KnownError,
    ModerationRefusedError,
    MutationError,
    SessionAlreadyLoadedError,
    TitleLookupError,
)
from watchconsole.models.session import SessionContext, Snapshot, TitleMetadata
from watchconsole.models.watchlist import Watchlist

__all__ = [
    "Account",
    "Comment",
    "ConfirmationRequiredError",
    "FailureDetail",
    "FailureKind",
    "FetchError",
    "KnownError",
    "ModerationRefusedError",
    "MutationError",
    "SessionAlreadyLoadedError",
    "SessionContext",
    "Snapshot",
    "TitleLookupError",
    "TitleMetadata",
    "Watchlist",
]
