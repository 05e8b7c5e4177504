"""
Card role classifier.

Derives semantic roles for a card from its type, elixir cost and (when
available) joined combat stats. Rules are independent and additive; a
card can pick up any number of roles. Duplicates are removed at the end,
keeping first-seen order.

A card without a stats row still gets its type- and key-based roles but
never the stats-based ones (targets, air defense, splash, tank).
"""

from deckdoctor.models.card import CardInfo, CardType, RawCardRecord, Role, StatsRecord, Targets
from deckdoctor.services.normalizer import normalize_card_name

# Win conditions that the stats tables cannot detect on their own.
# Troops that only target buildings are detected from stats instead.
SPELL_WIN_CONDITION_KEYS: frozenset[str] = frozenset(
    {
        "goblin-barrel",
        "graveyard",
        # Tower finisher some decks rely on
        "rocket",
    }
)
BUILDING_WIN_CONDITION_KEYS: frozenset[str] = frozenset({"x-bow", "mortar"})
TROOP_WIN_CONDITION_KEYS: frozenset[str] = frozenset({"miner"})

TANK_KILLER_KEYS: frozenset[str] = frozenset(
    {
        "pekka",
        "mini-pekka",
        "inferno-dragon",
        "inferno-tower",
        "hunter",
        "mighty-miner",
    }
)

# Swarm markers. The key is checked against more markers than the name:
# "bats", "skeletons", "goblins" and "minions" only count on the key.
SWARM_NAME_MARKERS: tuple[str, ...] = ("gang", "horde", "army", "recruits")
SWARM_KEY_MARKERS: tuple[str, ...] = SWARM_NAME_MARKERS + (
    "bats",
    "skeletons",
    "goblins",
    "minions",
)
SWARM_MAX_ELIXIR = 5

SMALL_SPELL_MAX_ELIXIR = 3
CYCLE_MAX_ELIXIR = 2
TANK_MIN_HITPOINTS = 1500
TANK_MIN_ELIXIR = 5


def infer_targets(stats: StatsRecord | None) -> Targets | None:
    """What a card can attack, or None if there are no stats to tell."""
    if stats is None:
        return None

    air = stats.attacks_air is True
    ground = stats.attacks_ground is True
    if air and ground:
        return Targets.BOTH
    if air:
        return Targets.AIR
    if ground:
        return Targets.GROUND
    return None


def is_swarm(key: str, name: str, elixir: int) -> bool:
    """Swarm heuristic based on marker substrings in the key and name."""
    if elixir > SWARM_MAX_ELIXIR:
        return False

    normalized_key = normalize_card_name(key)
    normalized_name = normalize_card_name(name)
    return any(marker in normalized_key for marker in SWARM_KEY_MARKERS) or any(
        marker in normalized_name for marker in SWARM_NAME_MARKERS
    )


def has_splash(stats: StatsRecord | None) -> bool:
    """True if the stats show area damage or multi-target hits."""
    if stats is None:
        return False

    radius = stats.area_damage_radius if stats.area_damage_radius is not None else 0.0
    multiple = stats.multiple_targets if stats.multiple_targets is not None else 0.0
    return radius > 0 or multiple > 0 or stats.all_targets_hit is True


def is_tank(record: RawCardRecord, stats: StatsRecord | None) -> bool:
    if record.type != CardType.TROOP or stats is None or stats.hitpoints is None:
        return False
    return stats.hitpoints >= TANK_MIN_HITPOINTS and record.elixir >= TANK_MIN_ELIXIR


def classify(record: RawCardRecord, stats: StatsRecord | None) -> CardInfo:
    """
    Build the CardInfo for a raw card record.

    Args:
        record: Row from the card list
        stats: Matching troop/building stats row, or None

    Returns:
        CardInfo with roles in derivation order
    """
    roles: list[Role] = []

    if record.rarity == "champion":
        roles.append(Role.CHAMPION)

    if record.type == CardType.SPELL:
        roles.append(
            Role.SPELL_SMALL if record.elixir <= SMALL_SPELL_MAX_ELIXIR else Role.SPELL_BIG
        )
        if record.key in SPELL_WIN_CONDITION_KEYS:
            roles.append(Role.WIN_CONDITION)
    elif record.type == CardType.BUILDING:
        roles.append(Role.BUILDING)
        if record.key in BUILDING_WIN_CONDITION_KEYS:
            roles.append(Role.WIN_CONDITION)
    else:
        targets_buildings = stats is not None and stats.target_only_buildings is True
        if targets_buildings or record.key in TROOP_WIN_CONDITION_KEYS:
            roles.append(Role.WIN_CONDITION)

    targets = infer_targets(stats)
    if targets in (Targets.AIR, Targets.BOTH):
        roles.append(Role.AIR_DEFENSE)

    if record.type == CardType.TROOP and record.elixir <= CYCLE_MAX_ELIXIR:
        roles.append(Role.CYCLE)

    if record.type == CardType.TROOP and is_swarm(record.key, record.name, record.elixir):
        roles.append(Role.SWARM)

    if has_splash(stats):
        roles.append(Role.SPLASH)

    if is_tank(record, stats):
        roles.append(Role.TANK)

    if record.type == CardType.TROOP and record.key in TANK_KILLER_KEYS:
        roles.append(Role.TANK_KILLER)

    return CardInfo(
        key=record.key,
        name=record.name,
        elixir=record.elixir,
        roles=tuple(dict.fromkeys(roles)),
        type=record.type,
        targets=targets,
        rarity=record.rarity,
    )
