"""
Counter guide.

Static counter advice keyed by card slug, shipped as
``deckdoctor/data/counter_strategies.json``. Lookup is a plain dictionary
lookup on the slug form of the input; when a lookup index is supplied,
inputs the slug misses ("P.E.K.K.A", "Evolved Knight") are retried
through the index's canonical key.
"""

import json
import logging
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from deckdoctor.config import PACKAGE_DATA_DIR
from deckdoctor.models.counter import CounterStrategy
from deckdoctor.services.lookup_index import LookupIndex
from deckdoctor.services.normalizer import normalize_card_name

logger = logging.getLogger(__name__)

COUNTER_STRATEGIES_FILE = "counter_strategies.json"


def load_counter_strategies(path: Path | None = None) -> Mapping[str, CounterStrategy]:
    """
    Load counter advice from disk.

    Args:
        path: JSON file to read. Defaults to the copy bundled with the package

    Returns:
        Read-only mapping of card key to CounterStrategy

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a list of well-formed strategies
    """
    if path is None:
        path = PACKAGE_DATA_DIR / COUNTER_STRATEGIES_FILE

    if not path.exists():
        raise FileNotFoundError(f"Counter strategies not found at {path}")

    try:
        with open(path, encoding="utf-8") as f:
            rows = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Counter strategies file {path} is corrupted: {e}") from e

    if not isinstance(rows, list):
        raise ValueError(f"Counter strategies file {path} is corrupted: expected a JSON list")

    strategies: dict[str, CounterStrategy] = {}
    for row in rows:
        if not isinstance(row, dict) or not row.get("key"):
            raise ValueError(f"Counter strategies file {path} has a row without a key")
        strategies[str(row["key"])] = CounterStrategy.from_dict(row)

    logger.info("Loaded counter advice for %d cards", len(strategies))
    return MappingProxyType(strategies)


@lru_cache(maxsize=1)
def get_counter_strategies() -> Mapping[str, CounterStrategy]:
    """Bundled counter advice, loaded once per process."""
    return load_counter_strategies()


def get_counter_strategy(
    card_name: str,
    index: LookupIndex | None = None,
    strategies: Mapping[str, CounterStrategy] | None = None,
) -> CounterStrategy | None:
    """
    Look up counter advice for a card.

    Args:
        card_name: Card name or key as entered
        index: Optional lookup index for inputs the slug form misses
        strategies: Advice table to search. Defaults to the bundled table

    Returns:
        CounterStrategy, or None if the card has no entry
    """
    if strategies is None:
        strategies = get_counter_strategies()

    strategy = strategies.get(normalize_card_name(card_name))
    if strategy is not None or index is None:
        return strategy

    key = index.lookup_key(card_name)
    return strategies.get(key) if key is not None else None


def list_counter_cards(strategies: Mapping[str, CounterStrategy] | None = None) -> list[str]:
    """Display names for every card with counter advice ("hog-rider" -> "Hog Rider")."""
    if strategies is None:
        strategies = get_counter_strategies()

    names = [
        " ".join(word[:1].upper() + word[1:] for word in key.split("-"))
        for key in strategies
    ]
    return sorted(names)
