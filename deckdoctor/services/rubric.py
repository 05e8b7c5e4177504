"""
Deck rubric.

Scores an 8-card deck against six fixed checks. Every run starts at 100
and each failed check subtracts its penalty. Checks are independent, so
their order only affects the order of the feedback lists.

Preconditions are terminal: a deck of the wrong size or with an
unresolvable card name raises DeckValidationError and produces no
partial analysis.
"""

import logging
from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from deckdoctor.config import (
    DECK_SIZE,
    ELIXIR_CRITICAL_ABOVE,
    ELIXIR_HEAVY_ABOVE,
    ELIXIR_LIGHT_BELOW,
    GRADE_THRESHOLDS,
    MAX_SPLASH_CARDS,
)
from deckdoctor.models.analysis import CheckName, CheckResult, DeckAnalysis, Grade, Severity
from deckdoctor.models.card import CardInfo, Role, Targets
from deckdoctor.models.failure import DeckValidationError
from deckdoctor.services.lookup_index import LookupIndex

logger = logging.getLogger(__name__)

MAX_SCORE = 100


@dataclass(frozen=True)
class CheckOutcome:
    """What one check contributes to the analysis."""

    result: CheckResult
    penalty: int = 0
    issue: str | None = None
    strength: str | None = None
    recommendation: str | None = None


def _passed(message: str, strength: str | None = None) -> CheckOutcome:
    return CheckOutcome(
        result=CheckResult(passed=True, message=message, severity=Severity.MINOR),
        strength=strength,
    )


def _failed(
    message: str,
    severity: Severity,
    penalty: int,
    issue: str,
    recommendation: str | None = None,
) -> CheckOutcome:
    return CheckOutcome(
        result=CheckResult(passed=False, message=message, severity=severity),
        penalty=penalty,
        issue=issue,
        recommendation=recommendation,
    )


def average_elixir(cards: Sequence[CardInfo]) -> float:
    """Mean elixir cost, unrounded."""
    return sum(card.elixir for card in cards) / len(cards)


def check_win_condition(cards: Sequence[CardInfo]) -> CheckOutcome:
    win_conditions = [card.name for card in cards if card.has_role(Role.WIN_CONDITION)]
    if not win_conditions:
        return _failed(
            "No win condition detected. You need a card that reliably targets buildings.",
            Severity.CRITICAL,
            30,
            issue="Missing win condition",
            recommendation="Add a win condition like Hog Rider, Goblin Barrel, or Balloon",
        )

    names = ", ".join(win_conditions)
    return _passed(
        f"Win condition: {names}",
        strength=f"Has {len(win_conditions)} win condition(s): {names}",
    )


def check_spells(cards: Sequence[CardInfo]) -> CheckOutcome:
    small = sum(1 for card in cards if card.has_role(Role.SPELL_SMALL))
    big = sum(1 for card in cards if card.has_role(Role.SPELL_BIG))

    if small == 0 and big == 0:
        return _failed(
            "No spells. You need at least a small spell to deal with swarms.",
            Severity.CRITICAL,
            25,
            issue="No spells",
            recommendation=(
                "Add Zap or Arrows for swarms, and Fireball or Poison for medium troops"
            ),
        )
    if small == 0:
        return _failed(
            "Missing small spell (2-3 elixir) to counter swarms quickly.",
            Severity.MAJOR,
            15,
            issue="No small spell",
            recommendation="Add Zap, Arrows, or Log to counter Skeleton Army and Goblin Gang",
        )
    if big == 0:
        return _failed(
            "Missing big spell (4+ elixir) for area damage and finishing towers.",
            Severity.MAJOR,
            15,
            issue="No big spell",
            recommendation="Add Fireball or Poison to punish clumped troops",
        )

    return _passed(
        f"Balanced spell coverage: {small} small, {big} big",
        strength="Two-spell standard met",
    )


def check_elixir_cost(cards: Sequence[CardInfo]) -> CheckOutcome:
    avg = average_elixir(cards)

    if avg > ELIXIR_CRITICAL_ABOVE:
        return _failed(
            f"Average elixir ({avg:.1f}) is too high. You'll struggle in single elixir.",
            Severity.CRITICAL,
            20,
            issue="Deck too heavy",
            recommendation=(
                "Replace expensive cards with cheaper alternatives (aim for 3.0-4.0 average)"
            ),
        )
    if avg > ELIXIR_HEAVY_ABOVE:
        return _failed(
            f"Average elixir ({avg:.1f}) is slightly high. Consider cheaper options.",
            Severity.MINOR,
            5,
            issue="Deck slightly heavy",
        )
    if avg < ELIXIR_LIGHT_BELOW:
        return _failed(
            f"Average elixir ({avg:.1f}) is too low. May lack defensive power.",
            Severity.MINOR,
            5,
            issue="Deck very light",
        )

    return _passed(
        f"Average elixir ({avg:.1f}) is in the optimal range (3.0-4.0)",
        strength="Optimal elixir cost",
    )


def check_air_defense(cards: Sequence[CardInfo]) -> CheckOutcome:
    # The role is partly derived from targets; both are checked on purpose
    air_defense = [
        card.name
        for card in cards
        if card.has_role(Role.AIR_DEFENSE) or card.targets in (Targets.AIR, Targets.BOTH)
    ]

    if not air_defense:
        return _failed(
            "No air defense! Balloon and Lava Hound will destroy you.",
            Severity.CRITICAL,
            30,
            issue="No air counters",
            recommendation="Add Musketeer, Electro Wizard, or Mega Minion for air defense",
        )
    if len(air_defense) < 2:
        return _failed(
            "Only one air defense unit. Add backup for heavy air decks.",
            Severity.MAJOR,
            10,
            issue="Weak air defense",
            recommendation="Add a second air-targeting troop for reliability",
        )

    return _passed(
        f"Solid air defense: {', '.join(air_defense)}",
        strength="Strong air defense",
    )


def check_tank_killer(cards: Sequence[CardInfo]) -> CheckOutcome:
    tank_killers = sum(1 for card in cards if card.has_role(Role.TANK_KILLER))
    buildings = sum(1 for card in cards if card.has_role(Role.BUILDING))

    if tank_killers == 0 and buildings == 0:
        return _failed(
            "No high-DPS units or buildings. Tanks like Golem will overwhelm you.",
            Severity.MAJOR,
            15,
            issue="No tank killer",
            recommendation="Add Mini P.E.K.K.A, Inferno Dragon, or Inferno Tower",
        )

    return _passed("Has tank-killing capability", strength="Can handle tanks")


def check_redundancy(cards: Sequence[CardInfo]) -> CheckOutcome:
    # Only splash is checked for over-representation
    role_counts = Counter(role for card in cards for role in card.roles)

    if role_counts[Role.SPLASH] > MAX_SPLASH_CARDS:
        return _failed(
            "Too many cards doing the same job. Diversify your roles.",
            Severity.MINOR,
            10,
            issue="Redundant roles",
            recommendation="Replace one splash unit with a cycle card or different role",
        )

    return _passed("Balanced role distribution")


CHECKS: tuple[tuple[CheckName, Callable[[Sequence[CardInfo]], CheckOutcome]], ...] = (
    (CheckName.WIN_CONDITION, check_win_condition),
    (CheckName.SPELLS, check_spells),
    (CheckName.ELIXIR_COST, check_elixir_cost),
    (CheckName.AIR_DEFENSE, check_air_defense),
    (CheckName.TANK_KILLER, check_tank_killer),
    (CheckName.REDUNDANCY, check_redundancy),
)


def grade_for_score(score: int) -> Grade:
    """Letter grade for a score; thresholds are inclusive lower bounds."""
    for minimum, grade in GRADE_THRESHOLDS:
        if score >= minimum:
            return Grade(grade)
    return Grade.F


def score_cards(cards: Sequence[CardInfo]) -> DeckAnalysis:
    """
    Run the rubric over already-resolved cards.

    Args:
        cards: Exactly DECK_SIZE resolved cards

    Returns:
        DeckAnalysis with score, grade and per-check feedback
    """
    analysis = DeckAnalysis(
        grade=Grade.S,
        score=MAX_SCORE,
        avg_elixir=round(average_elixir(cards), 2),
    )

    score = MAX_SCORE
    for name, check in CHECKS:
        outcome = check(cards)
        analysis.check_results[name] = outcome.result
        score -= outcome.penalty
        if outcome.issue:
            analysis.issues.append(outcome.issue)
        if outcome.strength:
            analysis.strengths.append(outcome.strength)
        if outcome.recommendation:
            analysis.recommendations.append(outcome.recommendation)

    analysis.score = max(0, score)
    analysis.grade = grade_for_score(analysis.score)
    return analysis


def analyze_deck(card_names: Sequence[str], index: LookupIndex) -> DeckAnalysis:
    """
    Analyze an 8-card deck given as free-text card names.

    Args:
        card_names: Card names as entered by the user
        index: Lookup index used to resolve the names

    Returns:
        DeckAnalysis for the deck

    Raises:
        DeckValidationError: If the deck does not have exactly 8 cards,
            or if any name does not resolve (all such names are listed)
    """
    if len(card_names) != DECK_SIZE:
        raise DeckValidationError.wrong_size(len(card_names))

    cards, unresolved = index.resolve_all(card_names)
    if unresolved:
        raise DeckValidationError.unknown_cards(unresolved)

    analysis = score_cards(cards)
    logger.info("Deck scored %d (grade %s)", analysis.score, analysis.grade.value)
    return analysis
