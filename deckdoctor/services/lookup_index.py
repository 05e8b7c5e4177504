"""
Card Lookup Index.

Resolves free-text card names ("P.E.K.K.A", "the log", "Evolved Archers")
to catalog cards.

INVARIANTS:
1. Every normalized variant maps to at most one catalog key
2. Collisions are last-write-wins, never an error
3. The index holds keys only; CardInfo objects live in the Catalog
4. The index is read-only once built
"""

import logging
import re
from collections.abc import Iterable
from types import MappingProxyType

from deckdoctor.models.card import CardInfo
from deckdoctor.services.card_catalog import Catalog
from deckdoctor.services.normalizer import normalize_card_name, normalize_for_join

logger = logging.getLogger(__name__)

_EVOLVED_PREFIX = re.compile(r"^evolved\s+", re.IGNORECASE)
_ARTICLE_PREFIX = "the "


class LookupIndex:
    """
    Maps normalized card-name variants back to canonical catalog keys.

    Registered variants per card:
    - join and slug forms of the key and the display name
    - join form of the key with hyphens read as spaces
    - join and slug forms of the name without a leading "The "
    """

    def __init__(self, catalog: Catalog) -> None:
        """
        Build the index from a completed catalog.

        Args:
            catalog: The catalog to index. Held by reference, never copied.
        """
        self._catalog = catalog
        self._keys = MappingProxyType(self._build_keys())

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def __len__(self) -> int:
        """Number of registered variants."""
        return len(self._keys)

    def _build_keys(self) -> dict[str, str]:
        keys: dict[str, str] = {}

        def register(normalized: str, key: str) -> None:
            if normalized:
                keys[normalized] = key

        for key, card in self._catalog.items():
            register(normalize_for_join(key), key)
            register(normalize_card_name(key), key)

            register(normalize_for_join(card.name), key)
            register(normalize_card_name(card.name), key)

            register(normalize_for_join(key.replace("-", " ")), key)

            # "The Log" should also answer to "Log"
            if card.name.lower().startswith(_ARTICLE_PREFIX):
                bare_name = card.name[len(_ARTICLE_PREFIX) :]
                register(normalize_for_join(bare_name), key)
                register(normalize_card_name(bare_name), key)

        return keys

    def lookup_key(self, raw: str) -> str | None:
        """
        Find the canonical catalog key for free-text input.

        Tries, in order, stopping at the first hit:
        1. slug form of the input as a catalog key (fast path)
        2. join form of the input
        3. join form of the input's slug form
        4. both of the above on the input without an "Evolved " prefix

        Returns:
            Catalog key, or None if nothing matched
        """
        trimmed = (raw or "").strip()
        if not trimmed:
            return None

        evolved_stripped = _EVOLVED_PREFIX.sub("", trimmed).strip()

        slug = normalize_card_name(trimmed)
        if slug in self._catalog:
            return slug

        candidates = [normalize_for_join(trimmed), normalize_for_join(slug)]
        if evolved_stripped != trimmed:
            candidates.append(normalize_for_join(evolved_stripped))
            candidates.append(normalize_for_join(normalize_card_name(evolved_stripped)))

        for candidate in candidates:
            key = self._keys.get(candidate)
            if key is not None:
                return key

        logger.debug("No card matches %r", trimmed)
        return None

    def resolve(self, raw: str) -> CardInfo | None:
        """
        Resolve free-text input to a catalog card.

        Args:
            raw: User-entered card name or key

        Returns:
            The catalog CardInfo, or None if the input matches no card
        """
        key = self.lookup_key(raw)
        if key is None:
            return None
        return self._catalog.get(key)

    def resolve_all(self, names: Iterable[str]) -> tuple[list[CardInfo], list[str]]:
        """
        Resolve several names at once.

        Returns:
            (resolved cards in input order, unresolved inputs verbatim)
        """
        resolved: list[CardInfo] = []
        unresolved: list[str] = []
        for name in names:
            card = self.resolve(name)
            if card is None:
                unresolved.append(name)
            else:
                resolved.append(card)
        return resolved, unresolved
