"""
Failure envelope and response classification.

Anything that goes wrong in a request is reported to the client in one
of two shapes:

- known_failure: we can say exactly what was wrong (a 7-card deck, a
  card name nothing resolves to, card data not loaded yet)
- unknown_failure: an unexpected exception; the client gets a fixed
  message and the exception type name, never the exception text

KnownError messages are shown to the user verbatim, so they are written
for players rather than developers.
"""

from collections.abc import Sequence
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from deckdoctor.config import DECK_SIZE

T = TypeVar("T")

UNKNOWN_FAILURE_MESSAGE = "I failed and I don't know why. Try simplifying the request or retrying."
UNKNOWN_FAILURE_SUGGESTION = "If this persists, please report the issue."

DOWNLOAD_HINT = "Run `python -m deckdoctor.jobs.download_cards` to fetch the card data."


class FailureKind(str, Enum):
    """Why a request failed."""

    INVALID_INPUT = "invalid_input"
    DECK_SIZE_VIOLATION = "deck_size_violation"
    UNKNOWN_CARD = "unknown_card"
    NOT_FOUND = "not_found"
    SERVICE_UNAVAILABLE = "service_unavailable"
    EXTERNAL_API_ERROR = "external_api_error"
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


class FailureDetail(BaseModel):
    """
    What went wrong, for display.

    Attributes:
        kind: Failure classification
        message: Player-facing explanation
        detail: Extra context (a count, a type name), if any
        suggestion: What to try next, if anything
    """

    kind: FailureKind
    message: str
    detail: str | None = None
    suggestion: str | None = None


class ApiResponse(BaseModel, Generic[T]):
    """Outcome envelope: exactly one of ``data`` / ``failure`` is set."""

    outcome: OutcomeType
    data: T | None = None
    failure: FailureDetail | None = None

    @classmethod
    def success(cls, data: T) -> "ApiResponse[T]":
        return cls(outcome=OutcomeType.SUCCESS, data=data)

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        failure = FailureDetail(kind=kind, message=message, detail=detail, suggestion=suggestion)
        return cls(outcome=OutcomeType.KNOWN_FAILURE, failure=failure)

    @classmethod
    def unknown_failure(cls, detail: str | None = None) -> "ApiResponse[Any]":
        """Envelope for unexpected errors. The message never varies."""
        failure = FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=UNKNOWN_FAILURE_MESSAGE,
            detail=detail,
            suggestion=UNKNOWN_FAILURE_SUGGESTION,
        )
        return cls(outcome=OutcomeType.UNKNOWN_FAILURE, failure=failure)


class KnownError(Exception):
    """
    An error whose cause we can explain to the player.

    Raise a subclass from anywhere in a request; the app's exception
    handler turns it into a known_failure envelope with ``status_code``.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code

    def to_response(self) -> ApiResponse[Any]:
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class DeckValidationError(KnownError):
    """
    A deck failed the rubric's preconditions.

    There is no partial analysis for such a deck. Use the ``wrong_size``
    and ``unknown_cards`` constructors so messages stay consistent.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        unknown_names: Sequence[str] = (),
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(kind=kind, message=message, detail=detail, suggestion=suggestion)
        self.unknown_names = tuple(unknown_names)

    @classmethod
    def wrong_size(cls, actual_size: int) -> "DeckValidationError":
        return cls(
            kind=FailureKind.DECK_SIZE_VIOLATION,
            message=f"Deck must contain exactly {DECK_SIZE} cards",
            detail=f"Received {actual_size} cards",
            suggestion=f"Provide {DECK_SIZE} card names (got {actual_size}).",
        )

    @classmethod
    def unknown_cards(cls, names: Sequence[str]) -> "DeckValidationError":
        """Names are reported exactly as the user typed them."""
        return cls(
            kind=FailureKind.UNKNOWN_CARD,
            message=f"Unknown cards: {', '.join(names)}",
            unknown_names=names,
            suggestion="Check the spelling, or use the card's name as shown in game.",
        )


class CatalogUnavailableError(KnownError):
    """The card tables are missing, corrupted, or not loaded yet."""

    def __init__(self, detail: str | None = None):
        super().__init__(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message="Card database not available. Please try again later.",
            detail=detail,
            suggestion=DOWNLOAD_HINT,
            status_code=503,
        )


def create_unknown_failure(exception: Exception, include_type: bool = True) -> ApiResponse[Any]:
    """Classify an unexpected exception; only its type name is exposed."""
    return ApiResponse.unknown_failure(
        detail=type(exception).__name__ if include_type else None,
    )
