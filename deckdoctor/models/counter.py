from dataclasses import dataclass, field
from typing import Any, Literal, get_args

Effectiveness = Literal["excellent", "good", "fair"]
EFFECTIVENESS_LEVELS = frozenset(get_args(Effectiveness))


@dataclass(frozen=True)
class TilePosition:
    """Arena tile on the 18x32 grid. Origin is top-left, y grows downward."""

    x: int
    y: int


@dataclass(frozen=True)
class PlacementStep:
    position: TilePosition
    card: str
    description: str


@dataclass(frozen=True)
class CounterCard:
    """
    A card that answers a target card.

    Attributes:
        card: Counter card display name
        cost: Elixir cost of the counter
        effectiveness: How reliably it answers the target
        placement: Where and how to play it
        notes: Free-text advice
    """

    card: str
    cost: int
    effectiveness: Effectiveness
    placement: tuple[PlacementStep, ...] = field(default_factory=tuple)
    notes: str = ""


@dataclass(frozen=True)
class CounterStrategy:
    """Counter advice for one target card."""

    target_card: str
    counter_cards: tuple[CounterCard, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CounterStrategy":
        """
        Build a strategy from a JSON row.

        Raises:
            ValueError: If a field is missing or an effectiveness is unknown
        """
        try:
            counters = tuple(_counter_from_dict(row) for row in data["counter_cards"])
            return cls(target_card=str(data["target_card"]), counter_cards=counters)
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed counter strategy {data.get('key')!r}: {e}") from e


def _counter_from_dict(data: dict[str, Any]) -> CounterCard:
    effectiveness = data["effectiveness"]
    if effectiveness not in EFFECTIVENESS_LEVELS:
        raise ValueError(f"Unknown effectiveness {effectiveness!r}")

    placement = tuple(
        PlacementStep(
            position=TilePosition(x=int(step["x"]), y=int(step["y"])),
            card=str(step["card"]),
            description=str(step["description"]),
        )
        for step in data.get("placement", ())
    )
    return CounterCard(
        card=str(data["card"]),
        cost=int(data["cost"]),
        effectiveness=effectiveness,
        placement=placement,
        notes=str(data.get("notes", "")),
    )
