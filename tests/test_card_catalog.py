"""Tests for building and loading the card catalog."""

import json
from pathlib import Path
from typing import Any

import pytest

from deckdoctor.config import PACKAGE_DATA_DIR
from deckdoctor.models.card import Role, Targets
from deckdoctor.services.card_catalog import (
    BUILDING_STATS_FILE,
    CARDS_FILE,
    CHARACTER_STATS_FILE,
    Catalog,
    build_catalog,
    index_stats,
    load_card_tables,
    load_catalog,
)
from deckdoctor.services.counter_guide import get_counter_strategies
from deckdoctor.services.lookup_index import LookupIndex
from deckdoctor.services.rubric import analyze_deck


def _write_tables(
    directory: Path,
    cards: Any,
    character_stats: Any = (),
    building_stats: Any = (),
) -> None:
    (directory / CARDS_FILE).write_text(json.dumps(cards))
    (directory / CHARACTER_STATS_FILE).write_text(json.dumps(list(character_stats)))
    (directory / BUILDING_STATS_FILE).write_text(json.dumps(list(building_stats)))


class TestBuildCatalog:
    def test_every_valid_row_is_present(
        self, catalog: Catalog, card_rows: list[dict[str, Any]]
    ) -> None:
        """One catalog entry per well-formed card row, keyed by the row's key."""
        assert len(catalog) == len(card_rows)
        assert set(catalog) == {row["key"] for row in card_rows}

    def test_malformed_rows_are_dropped(self) -> None:
        """Bad rows are skipped without failing the build."""
        catalog = build_catalog(
            [
                {"key": "knight", "name": "Knight", "type": "troop", "elixir": 3},
                {"key": "mystery", "name": "Mystery", "type": "troop", "elixir": "?"},
                {"name": "No Key", "type": "troop", "elixir": 3},
                "not a row",
            ],
            [],
            [],
        )

        assert list(catalog) == ["knight"]

    def test_stats_join_by_normalized_name(self, catalog: Catalog) -> None:
        """"P.E.K.K.A" picks up the stats row named "PEKKA"."""
        pekka = catalog["pekka"]

        assert pekka.targets == Targets.GROUND
        assert pekka.has_role(Role.TANK)

    def test_missing_stats_row_keeps_card(self, catalog: Catalog) -> None:
        """Cards without stats are kept with no targets."""
        gang = catalog["goblin-gang"]

        assert gang.targets is None
        assert gang.roles == (Role.SWARM,)

    def test_spells_never_get_stats(self) -> None:
        """A stats row sharing a spell's name is ignored."""
        catalog = build_catalog(
            [{"key": "zap", "name": "Zap", "type": "spell", "elixir": 2}],
            [{"name": "Zap", "attacks_air": True, "attacks_ground": True}],
            [],
        )

        assert catalog["zap"].targets is None
        assert catalog["zap"].roles == (Role.SPELL_SMALL,)

    def test_building_stats_come_from_building_table(self) -> None:
        """Buildings only join against the building stats table."""
        catalog = build_catalog(
            [{"key": "tesla", "name": "Tesla", "type": "building", "elixir": 4}],
            [{"name": "Tesla", "attacks_air": True}],
            [{"name": "Tesla", "attacks_ground": True}],
        )

        assert catalog["tesla"].targets == Targets.GROUND

    def test_duplicate_key_last_wins(self) -> None:
        """A repeated key keeps the later row."""
        catalog = build_catalog(
            [
                {"key": "knight", "name": "Knight", "type": "troop", "elixir": 3},
                {"key": "knight", "name": "Knight", "type": "troop", "elixir": 4},
            ],
            [],
            [],
        )

        assert len(catalog) == 1
        assert catalog["knight"].elixir == 4

    def test_catalog_is_read_only(self, catalog: Catalog) -> None:
        """The underlying mapping cannot be mutated."""
        with pytest.raises(TypeError):
            catalog.cards["knight"] = catalog["knight"]  # type: ignore[index]

    def test_get_missing_key(self, catalog: Catalog) -> None:
        """get returns None for unknown keys."""
        assert catalog.get("not-a-card") is None
        assert "not-a-card" not in catalog


class TestIndexStats:
    def test_last_row_wins(self) -> None:
        """Rows that normalize to the same name overwrite earlier ones."""
        stats = index_stats(
            [
                {"name": "P.E.K.K.A", "hitpoints": 1},
                {"name": "PEKKA", "hitpoints": 2},
            ]
        )

        assert stats["pekka"].hitpoints == 2

    def test_rows_without_name_skipped(self) -> None:
        """Nameless rows cannot be joined and are skipped."""
        assert index_stats([{"hitpoints": 10}]) == {}


class TestLoadCatalog:
    def test_load_from_directory(self, tmp_path: Path, card_rows: list[dict[str, Any]]) -> None:
        """Tables on disk build the same catalog as in-memory rows."""
        _write_tables(tmp_path, card_rows)

        catalog = load_catalog(tmp_path)

        assert len(catalog) == len(card_rows)

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing table raises FileNotFoundError naming the download job."""
        with pytest.raises(FileNotFoundError, match="download_cards"):
            load_card_tables(tmp_path)

    def test_corrupted_json(self, tmp_path: Path) -> None:
        """Unparseable JSON raises ValueError."""
        _write_tables(tmp_path, [])
        (tmp_path / CARDS_FILE).write_text("{not json")

        with pytest.raises(ValueError, match="corrupted"):
            load_card_tables(tmp_path)

    def test_non_list_table(self, tmp_path: Path) -> None:
        """A table that is not a JSON list raises ValueError."""
        _write_tables(tmp_path, {"cards": []})

        with pytest.raises(ValueError, match="expected a JSON list"):
            load_card_tables(tmp_path)

    def test_defaults_to_settings_data_dir(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Without an explicit directory the configured data_dir is used."""
        from deckdoctor.config import settings

        _write_tables(tmp_path, [{"key": "zap", "name": "Zap", "type": "spell", "elixir": 2}])
        monkeypatch.setattr(settings, "data_dir", tmp_path)

        assert list(load_catalog()) == ["zap"]


class TestShippedCatalog:
    """The card tables bundled with the package."""

    @pytest.fixture
    def shipped(self) -> Catalog:
        return load_catalog(PACKAGE_DATA_DIR)

    def test_loads(self, shipped: Catalog) -> None:
        """The bundled tables cover the full card pool."""
        assert len(shipped) >= 119

    def test_known_roles(self, shipped: Catalog) -> None:
        """Spot-check derived roles on well-known cards."""
        assert shipped["hog-rider"].has_role(Role.WIN_CONDITION)
        assert shipped["musketeer"].has_role(Role.AIR_DEFENSE)
        assert shipped["pekka"].roles == (Role.TANK, Role.TANK_KILLER)
        assert shipped["goblin-barrel"].roles == (Role.SPELL_SMALL, Role.WIN_CONDITION)
        assert shipped["x-bow"].has_role(Role.WIN_CONDITION)
        assert shipped["mighty-miner"].roles == (Role.CHAMPION, Role.TANK_KILLER)

    def test_no_champion_without_champion_rarity(self, shipped: Catalog) -> None:
        """Only champion-rarity cards carry the champion role."""
        for _key, card in shipped.items():
            assert card.has_role(Role.CHAMPION) == (card.rarity == "champion")

    def test_every_counter_target_resolves(self, shipped: Catalog) -> None:
        """Each card with counter advice is in the catalog, by key and by name."""
        index = LookupIndex(shipped)

        for key, strategy in get_counter_strategies().items():
            assert index.lookup_key(key) == key
            assert index.lookup_key(strategy.target_card) == key

    @pytest.mark.parametrize(
        ("name", "key"),
        [
            ("Dark Prince", "dark-prince"),
            ("Sparky", "sparky"),
            ("Furnace", "furnace"),
            ("Electro Giant", "electro-giant"),
            ("Prince", "prince"),
            ("Freeze", "freeze"),
        ],
    )
    def test_resolves_common_cards(self, shipped: Catalog, name: str, key: str) -> None:
        """Cards outside the old starter set resolve."""
        assert LookupIndex(shipped).lookup_key(name) == key

    @pytest.mark.parametrize(
        "deck",
        [
            [
                "P.E.K.K.A",
                "Battle Ram",
                "Bandit",
                "Royal Ghost",
                "Electro Wizard",
                "Magic Archer",
                "Poison",
                "Zap",
            ],
            [
                "Hog Rider",
                "Musketeer",
                "Ice Golem",
                "Ice Spirit",
                "Skeletons",
                "Cannon",
                "Fireball",
                "The Log",
            ],
            [
                "Goblin Barrel",
                "Princess",
                "Goblin Gang",
                "Knight",
                "Inferno Tower",
                "Rocket",
                "The Log",
                "Ice Spirit",
            ],
            [
                "Golem",
                "Night Witch",
                "Baby Dragon",
                "Lumberjack",
                "Electro Wizard",
                "Tornado",
                "Lightning",
                "Zap",
            ],
        ],
    )
    def test_meta_decks_analyze(self, shipped: Catalog, deck: list[str]) -> None:
        """Popular ladder decks resolve in full and get a grade."""
        analysis = analyze_deck(deck, LookupIndex(shipped))

        assert 0 <= analysis.score <= 100
        assert analysis.avg_elixir > 0
