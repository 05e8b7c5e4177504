"""
Card Models.

This module defines the boundary between the raw static card tables
and the derived, role-tagged cards the rubric works with.

INVARIANTS:
- RawCardRecord and StatsRecord are UNTRUSTED table rows
- CardInfo is built once per card at catalog build time
- All models are frozen (immutable after construction)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Role(str, Enum):
    """Semantic tag derived from a card's type, cost and stats."""

    WIN_CONDITION = "win_condition"
    TANK = "tank"
    TANK_KILLER = "tank_killer"
    SPLASH = "splash"
    AIR_DEFENSE = "air_defense"
    BUILDING = "building"
    SPELL_SMALL = "spell_small"
    SPELL_BIG = "spell_big"
    CYCLE = "cycle"
    SWARM = "swarm"
    CHAMPION = "champion"


class CardType(str, Enum):
    TROOP = "troop"
    SPELL = "spell"
    BUILDING = "building"


class Targets(str, Enum):
    GROUND = "ground"
    AIR = "air"
    BOTH = "both"


@dataclass(frozen=True, slots=True)
class RawCardRecord:
    """
    One row of the static card list.

    Attributes:
        key: Stable slug (e.g., "hog-rider")
        name: Display name (e.g., "Hog Rider")
        type: Card type as given by the source ("troop", "spell", "building")
        elixir: Elixir cost
        rarity: Lowercase rarity ("common" ... "champion"), if known
    """

    key: str
    name: str
    type: str
    elixir: int
    rarity: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RawCardRecord | None":
        """
        Build a record from a JSON row.

        Returns None for malformed rows (missing key, name or type, or a
        non-numeric or fractional elixir cost). Malformed rows are dropped,
        not reported.
        """
        key = data.get("key")
        name = data.get("name")
        card_type = data.get("type")
        elixir = data.get("elixir")

        if not key or not name or not card_type:
            return None
        # bool is an int subclass; a True/False elixir is malformed
        if isinstance(elixir, bool) or not isinstance(elixir, int | float):
            return None
        if isinstance(elixir, float) and not elixir.is_integer():
            return None

        rarity = data.get("rarity")
        return cls(
            key=str(key),
            name=str(name),
            type=str(card_type),
            elixir=int(elixir),
            rarity=str(rarity) if rarity else None,
        )


@dataclass(frozen=True, slots=True)
class StatsRecord:
    """
    Per-card combat stats from the troop or building stats table.

    Every field except ``name`` is optional. None means the source row
    did not carry the field; classifiers treat None as "unknown" and
    never as a positive signal.
    """

    name: str
    attacks_air: bool | None = None
    attacks_ground: bool | None = None
    target_only_buildings: bool | None = None
    area_damage_radius: float | None = None
    multiple_targets: float | None = None
    all_targets_hit: bool | None = None
    hitpoints: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StatsRecord | None":
        """Build a stats record from a JSON row, or None if it has no name."""
        name = data.get("name")
        if not name:
            return None

        hitpoints = data.get("hitpoints")
        return cls(
            name=str(name),
            attacks_air=_optional_bool(data.get("attacks_air")),
            attacks_ground=_optional_bool(data.get("attacks_ground")),
            target_only_buildings=_optional_bool(data.get("target_only_buildings")),
            area_damage_radius=_optional_number(data.get("area_damage_radius")),
            multiple_targets=_optional_number(data.get("multiple_targets")),
            all_targets_hit=_optional_bool(data.get("all_targets_hit")),
            hitpoints=int(hitpoints) if _optional_number(hitpoints) is not None else None,
        )


def _optional_bool(value: Any) -> bool | None:
    if value is None:
        return None
    return bool(value)


def _optional_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)


@dataclass(frozen=True, slots=True)
class CardInfo:
    """
    A catalog card with derived roles.

    Attributes:
        key: Canonical catalog key
        name: Display name
        elixir: Elixir cost
        roles: Derived roles, deduplicated, in first-derivation order
        type: Card type
        targets: What the card can attack, None when no stats were joined
        rarity: Lowercase rarity, if known
    """

    key: str
    name: str
    elixir: int
    roles: tuple[Role, ...]
    type: str
    targets: Targets | None = None
    rarity: str | None = None

    def has_role(self, role: Role) -> bool:
        """True if the card carries the given role."""
        return role in self.roles
