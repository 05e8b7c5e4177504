from deckdoctor.models.analysis import CheckName, CheckResult, DeckAnalysis, Grade, Severity
from deckdoctor.models.card import CardInfo, CardType, RawCardRecord, Role, StatsRecord, Targets
from deckdoctor.models.counter import CounterCard, CounterStrategy, PlacementStep, TilePosition
from deckdoctor.models.failure import (
    ApiResponse,
    CatalogUnavailableError,
    DeckValidationError,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
    create_unknown_failure,
)

__all__ = [
    "ApiResponse",
    "CardInfo",
    "CardType",
    "CatalogUnavailableError",
    "CheckName",
    "CheckResult",
    "CounterCard",
    "CounterStrategy",
    "DeckAnalysis",
    "DeckValidationError",
    "FailureDetail",
    "FailureKind",
    "Grade",
    "KnownError",
    "OutcomeType",
    "PlacementStep",
    "RawCardRecord",
    "Role",
    "Severity",
    "StatsRecord",
    "Targets",
    "TilePosition",
    "create_unknown_failure",
]
