"""
DeckDoctor services.

Card catalog, name resolution and deck scoring.
"""

from deckdoctor.services.card_catalog import (
    CardTables,
    Catalog,
    build_catalog,
    download_card_tables,
    load_card_tables,
    load_catalog,
)
from deckdoctor.services.counter_guide import (
    get_counter_strategies,
    get_counter_strategy,
    list_counter_cards,
    load_counter_strategies,
)
from deckdoctor.services.lookup_index import LookupIndex
from deckdoctor.services.normalizer import normalize_card_name, normalize_for_join
from deckdoctor.services.role_classifier import classify
from deckdoctor.services.rubric import analyze_deck, grade_for_score, score_cards

__all__ = [
    # Name normalization
    "normalize_card_name",
    "normalize_for_join",
    # Catalog
    "CardTables",
    "Catalog",
    "build_catalog",
    "classify",
    "download_card_tables",
    "load_card_tables",
    "load_catalog",
    # Lookup
    "LookupIndex",
    # Rubric
    "analyze_deck",
    "grade_for_score",
    "score_cards",
    # Counter guide
    "get_counter_strategies",
    "get_counter_strategy",
    "list_counter_cards",
    "load_counter_strategies",
]
