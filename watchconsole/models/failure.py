"""
Failure classification for the console.

Every failure the console can surface to an operator is a KnownError
subclass carrying a FailureKind, a user-appropriate message, and the
HTTP status the presentation boundary should use.

Taxonomy:
- FetchError: a listing call failed, the initial load is aborted
- TitleLookupError: a poster lookup failed, recovered during enrichment
- MutationError: a moderation call failed, local state is untouched
- ModerationRefusedError: the action is not allowed for the target
- SessionAlreadyLoadedError: the snapshot is only built once per session
- ConfirmationRequiredError: a destructive action was not confirmed
"""

from collections.abc import Sequence
from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    MISSING_REQUIRED = "missing_required"

    # Resource failures
    NOT_FOUND = "not_found"

    # Constraint violations
    FORBIDDEN_TARGET = "forbidden_target"
    ALREADY_LOADED = "already_loaded"

    # Service failures
    EXTERNAL_API_ERROR = "external_api_error"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the operator",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail for the presentation layer."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class FetchError(KnownError):
    """Raised when one or more of the listing calls fail."""

    def __init__(self, failed: Sequence[str], detail: str | None = None):
        self.failed = tuple(failed)
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=f"Failed to load console data: {', '.join(self.failed)}",
            detail=detail,
            suggestion="Check the backend service and reload the console.",
            status_code=502,
        )


class TitleLookupError(KnownError):
    """Raised when title metadata cannot be resolved."""

    def __init__(self, title_id: str, detail: str | None = None):
        self.title_id = title_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"Could not resolve title {title_id}",
            detail=detail,
            status_code=404,
        )


class MutationError(KnownError):
    """Raised when a moderation call is rejected or cannot reach the backend."""

    def __init__(self, action: str, target: str, detail: str | None = None):
        self.action = action
        self.target = target
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=f"Failed to {action} {target}",
            detail=detail,
            suggestion="No changes were applied. Try the action again.",
            status_code=502,
        )


class ModerationRefusedError(KnownError):
    """Raised when a moderation action targets an account it must not touch."""

    def __init__(self, user_id: str, reason: str):
        self.user_id = user_id
        super().__init__(
            kind=FailureKind.FORBIDDEN_TARGET,
            message=f"Cannot moderate account {user_id}: {reason}",
            status_code=403,
        )


class SessionAlreadyLoadedError(KnownError):
    """Raised when the initial load is requested a second time."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.ALREADY_LOADED,
            message="Console data is already loaded for this session.",
            status_code=409,
        )


class ConfirmationRequiredError(KnownError):
    """Raised when a destructive action is requested without confirmation."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(
            kind=FailureKind.MISSING_REQUIRED,
            message=f"Confirmation is required to {action}.",
            suggestion="Repeat the request with confirm=true.",
            status_code=409,
        )
