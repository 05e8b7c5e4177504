"""
Card catalog service.

Loads the static card tables and builds the immutable card catalog.

The catalog is built once from three tables:
- cards.json: the card list (key, name, type, rarity, elixir)
- cards_stats_characters.json: troop stats
- cards_stats_building.json: building stats

Stats are joined to cards by join-normalized name. Spells never get stats.
"""

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

import httpx

from deckdoctor.config import settings
from deckdoctor.models.card import CardInfo, CardType, RawCardRecord, StatsRecord
from deckdoctor.services.normalizer import normalize_for_join
from deckdoctor.services.role_classifier import classify

logger = logging.getLogger(__name__)

CARDS_FILE = "cards.json"
CHARACTER_STATS_FILE = "cards_stats_characters.json"
BUILDING_STATS_FILE = "cards_stats_building.json"
TABLE_FILES = (CARDS_FILE, CHARACTER_STATS_FILE, BUILDING_STATS_FILE)


@dataclass(frozen=True)
class CardTables:
    """The three raw input tables, as loaded from JSON."""

    cards: list[dict[str, Any]]
    character_stats: list[dict[str, Any]]
    building_stats: list[dict[str, Any]]


@dataclass(frozen=True)
class Catalog:
    """
    Immutable mapping of card key -> CardInfo.

    Keys are the card list's keys, unmodified. Nothing mutates a catalog
    after build_catalog returns it; a rebuild produces a new Catalog.
    """

    cards: Mapping[str, CardInfo]

    def get(self, key: str) -> CardInfo | None:
        return self.cards.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.cards

    def __getitem__(self, key: str) -> CardInfo:
        return self.cards[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def items(self) -> Iterable[tuple[str, CardInfo]]:
        return self.cards.items()


def index_stats(rows: Iterable[dict[str, Any]]) -> dict[str, StatsRecord]:
    """
    Index stats rows by join-normalized name.

    Later rows silently overwrite earlier rows with the same normalized
    name. Rows without a name are skipped.
    """
    by_name: dict[str, StatsRecord] = {}
    for row in rows:
        if not isinstance(row, dict):
            continue
        stats = StatsRecord.from_dict(row)
        if stats is not None:
            by_name[normalize_for_join(stats.name)] = stats
    return by_name


def stats_for(
    record: RawCardRecord,
    character_stats: Mapping[str, StatsRecord],
    building_stats: Mapping[str, StatsRecord],
) -> StatsRecord | None:
    """Find the stats row for a card by type and join-normalized name."""
    key = normalize_for_join(record.name)
    if record.type == CardType.BUILDING:
        return building_stats.get(key)
    if record.type == CardType.TROOP:
        return character_stats.get(key)
    return None


def build_catalog(
    cards: Iterable[dict[str, Any]],
    character_stats: Iterable[dict[str, Any]],
    building_stats: Iterable[dict[str, Any]],
) -> Catalog:
    """
    Build the card catalog from raw table rows.

    Malformed card rows (missing key/name/type or non-numeric elixir)
    are dropped. Cards without a stats row are kept with stats-based
    fields left empty.

    Args:
        cards: Card list rows
        character_stats: Troop stats rows
        building_stats: Building stats rows

    Returns:
        Immutable Catalog keyed by card key
    """
    character_by_name = index_stats(character_stats)
    building_by_name = index_stats(building_stats)

    built: dict[str, CardInfo] = {}
    dropped = 0
    without_stats = 0

    for row in cards:
        record = RawCardRecord.from_dict(row) if isinstance(row, dict) else None
        if record is None:
            dropped += 1
            continue

        stats = stats_for(record, character_by_name, building_by_name)
        if stats is None and record.type != CardType.SPELL:
            without_stats += 1

        built[record.key] = classify(record, stats)

    logger.info("Built card catalog with %d cards", len(built))
    logger.debug(
        "Catalog build dropped %d malformed rows; %d cards have no stats row",
        dropped,
        without_stats,
    )

    return Catalog(cards=MappingProxyType(built))


def _read_table(path: Path) -> list[dict[str, Any]]:
    if not path.exists():
        raise FileNotFoundError(
            f"Card data not found at {path}. "
            "Run `python -m deckdoctor.jobs.download_cards` first."
        )

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Card data file {path} is corrupted: {e}") from e

    if not isinstance(data, list):
        raise ValueError(f"Card data file {path} is corrupted: expected a JSON list")
    return data


def load_card_tables(data_dir: Path | None = None) -> CardTables:
    """
    Load the three static tables from disk.

    Args:
        data_dir: Directory holding the JSON files. Defaults to settings.data_dir

    Raises:
        FileNotFoundError: If a table file doesn't exist
        ValueError: If a table file is not a JSON list
    """
    if data_dir is None:
        data_dir = settings.data_dir

    return CardTables(
        cards=_read_table(data_dir / CARDS_FILE),
        character_stats=_read_table(data_dir / CHARACTER_STATS_FILE),
        building_stats=_read_table(data_dir / BUILDING_STATS_FILE),
    )


def load_catalog(data_dir: Path | None = None) -> Catalog:
    """Load the static tables and build a catalog from them."""
    tables = load_card_tables(data_dir)
    return build_catalog(tables.cards, tables.character_stats, tables.building_stats)


def _clean_card_rows(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep deck cards only, with lowercase type and rarity."""
    cleaned: list[dict[str, Any]] = []
    for row in rows:
        if not isinstance(row, dict) or not row.get("key") or not row.get("name"):
            continue
        cleaned.append(
            {
                "key": row["key"],
                "name": row["name"],
                "type": str(row.get("type", "")).strip().lower(),
                "rarity": str(row.get("rarity", "")).strip().lower() or None,
                "elixir": row.get("elixir"),
            }
        )
    cleaned.sort(key=lambda c: c["key"])
    return cleaned


async def download_card_tables(
    output_dir: Path | None = None,
    base_url: str | None = None,
) -> list[Path]:
    """
    Download the card list and stats tables from the cr-api-data mirror.

    Card types and rarities are lowercased on the way in; stats tables are
    written unchanged.

    Args:
        output_dir: Where to save the files. Defaults to settings.data_dir
        base_url: Mirror base URL. Defaults to settings.cr_api_data_url

    Returns:
        Paths of the written files.

    Raises:
        ValueError: If a downloaded table is not a JSON list
        httpx.HTTPError: If a download fails
    """
    if output_dir is None:
        output_dir = settings.data_dir
    if base_url is None:
        base_url = settings.cr_api_data_url

    output_dir.mkdir(parents=True, exist_ok=True)

    # Fetch everything before writing anything, so a failed download
    # never leaves a mix of old and new tables on disk
    payloads: dict[str, list[dict[str, Any]]] = {}
    async with httpx.AsyncClient(timeout=30.0) as client:
        for filename in TABLE_FILES:
            response = await client.get(f"{base_url.rstrip('/')}/{filename}")
            response.raise_for_status()
            data = response.json()

            if not isinstance(data, list):
                raise ValueError(f"Unexpected payload for {filename}: expected a JSON list")

            payloads[filename] = _clean_card_rows(data) if filename == CARDS_FILE else data

    written: list[Path] = []
    for filename, data in payloads.items():
        path = output_dir / filename
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        logger.info("Saved %d rows to %s", len(data), path)
        written.append(path)

    return written
