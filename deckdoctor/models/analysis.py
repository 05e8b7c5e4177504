"""
Deck analysis models.

A DeckAnalysis is built fresh for every rubric run and never persisted.
"""

from dataclasses import dataclass, field
from enum import Enum


class Severity(str, Enum):
    MINOR = "minor"
    MAJOR = "major"
    CRITICAL = "critical"


class Grade(str, Enum):
    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class CheckName(str, Enum):
    """Rubric checks, in the order they run."""

    WIN_CONDITION = "win_condition"
    SPELLS = "spells"
    ELIXIR_COST = "elixir_cost"
    AIR_DEFENSE = "air_defense"
    TANK_KILLER = "tank_killer"
    REDUNDANCY = "redundancy"


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a single rubric check."""

    passed: bool
    message: str
    severity: Severity


@dataclass
class DeckAnalysis:
    """
    Rubric result for one 8-card deck.

    Attributes:
        grade: Letter grade bucket for the score
        score: Final score, clamped to [0, 100]
        avg_elixir: Mean elixir cost rounded to 2 decimals
        issues: Short problem labels, in check order
        strengths: Short strength labels, in check order
        recommendations: Suggested fixes, in check order
        check_results: One entry per check, keyed by check name
    """

    grade: Grade
    score: int
    avg_elixir: float
    issues: list[str] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    check_results: dict[CheckName, CheckResult] = field(default_factory=dict)

    @property
    def passed_all(self) -> bool:
        """True if every check passed."""
        return all(result.passed for result in self.check_results.values())
