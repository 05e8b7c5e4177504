from collections.abc import AsyncIterator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from deckdoctor.main import app
from deckdoctor.services.card_catalog import Catalog, build_catalog
from deckdoctor.services.catalog_state import current_lookup_index, install_lookup_index
from deckdoctor.services.lookup_index import LookupIndex


def _card(key: str, name: str, card_type: str, rarity: str, elixir: int) -> dict[str, Any]:
    return {"key": key, "name": name, "type": card_type, "rarity": rarity, "elixir": elixir}


@pytest.fixture
def card_rows() -> list[dict[str, Any]]:
    """Card list rows in the cards.json shape."""
    return [
        _card("hog-rider", "Hog Rider", "troop", "rare", 4),
        _card("musketeer", "Musketeer", "troop", "rare", 4),
        _card("archers", "Archers", "troop", "common", 3),
        _card("knight", "Knight", "troop", "common", 3),
        _card("valkyrie", "Valkyrie", "troop", "rare", 4),
        _card("wizard", "Wizard", "troop", "rare", 5),
        _card("ice-spirit", "Ice Spirit", "troop", "common", 1),
        _card("skeletons", "Skeletons", "troop", "common", 1),
        _card("ice-golem", "Ice Golem", "troop", "rare", 2),
        _card("pekka", "P.E.K.K.A", "troop", "epic", 7),
        _card("mini-pekka", "Mini P.E.K.K.A", "troop", "rare", 4),
        _card("golem", "Golem", "troop", "epic", 8),
        _card("giant", "Giant", "troop", "rare", 5),
        _card("goblin-gang", "Goblin Gang", "troop", "common", 3),
        _card("mighty-miner", "Mighty Miner", "troop", "champion", 4),
        _card("cannon", "Cannon", "building", "common", 3),
        _card("x-bow", "X-Bow", "building", "epic", 6),
        _card("zap", "Zap", "spell", "common", 2),
        _card("the-log", "The Log", "spell", "legendary", 2),
        _card("fireball", "Fireball", "spell", "rare", 4),
        _card("goblin-barrel", "Goblin Barrel", "spell", "epic", 3),
        _card("rocket", "Rocket", "spell", "rare", 6),
    ]


@pytest.fixture
def character_stats_rows() -> list[dict[str, Any]]:
    """Troop stats rows. Goblin Gang deliberately has none."""
    return [
        {"name": "Hog Rider", "hitpoints": 1408, "attacks_ground": True, "target_only_buildings": True},
        {"name": "Musketeer", "hitpoints": 598, "attacks_air": True, "attacks_ground": True},
        {"name": "Archers", "hitpoints": 304, "attacks_air": True, "attacks_ground": True},
        {"name": "Knight", "hitpoints": 1766, "attacks_air": False, "attacks_ground": True},
        {"name": "Valkyrie", "hitpoints": 1654, "attacks_ground": True, "all_targets_hit": True},
        {
            "name": "Wizard",
            "hitpoints": 598,
            "attacks_air": True,
            "attacks_ground": True,
            "area_damage_radius": 1500,
        },
        {
            "name": "Ice Spirit",
            "hitpoints": 209,
            "attacks_air": True,
            "attacks_ground": True,
            "area_damage_radius": 1500,
        },
        {"name": "Skeletons", "hitpoints": 81, "attacks_ground": True},
        {"name": "Ice Golem", "hitpoints": 1198, "attacks_ground": True, "target_only_buildings": True},
        {"name": "PEKKA", "hitpoints": 3458, "attacks_ground": True},
        {"name": "Mini PEKKA", "hitpoints": 1129, "attacks_ground": True},
        {"name": "Golem", "hitpoints": 4256, "attacks_ground": True, "target_only_buildings": True},
        {"name": "Giant", "hitpoints": 3275, "attacks_ground": True, "target_only_buildings": True},
        {"name": "Mighty Miner", "hitpoints": 2250, "attacks_ground": True},
    ]


@pytest.fixture
def building_stats_rows() -> list[dict[str, Any]]:
    """Building stats rows."""
    return [
        {"name": "Cannon", "hitpoints": 824, "attacks_ground": True},
        {"name": "X-Bow", "hitpoints": 1600, "attacks_ground": True},
    ]


@pytest.fixture
def catalog(
    card_rows: list[dict[str, Any]],
    character_stats_rows: list[dict[str, Any]],
    building_stats_rows: list[dict[str, Any]],
) -> Catalog:
    """Catalog built from the fixture tables."""
    return build_catalog(card_rows, character_stats_rows, building_stats_rows)


@pytest.fixture
def index(catalog: Catalog) -> LookupIndex:
    """Lookup index over the fixture catalog."""
    return LookupIndex(catalog)


@pytest.fixture
def balanced_deck() -> list[str]:
    """A deck that passes every rubric check against the fixture catalog."""
    # 4 + 4 + 3 + 1 + 1 + 4 + 2 + 2 = 21 elixir, 2.625 average
    return [
        "Hog Rider",
        "Musketeer",
        "Cannon",
        "Ice Spirit",
        "Skeletons",
        "Fireball",
        "The Log",
        "Ice Golem",
    ]


@pytest.fixture
async def client(index: LookupIndex) -> AsyncIterator[AsyncClient]:
    """Async test client with the fixture catalog installed on the app."""
    install_lookup_index(app, index)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    uninstall_lookup_index()


@pytest.fixture
async def unloaded_client() -> AsyncIterator[AsyncClient]:
    """Async test client for an app that has no catalog loaded."""
    uninstall_lookup_index()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    uninstall_lookup_index()


def uninstall_lookup_index() -> None:
    if current_lookup_index(app) is not None:
        del app.state.lookup_index
