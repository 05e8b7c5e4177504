"""
Card name normalization.

Two canonical forms of a human-entered card name:

- join form: lowercase, ``&`` -> ``and``, everything outside [a-z0-9]
  removed. Used for punctuation-insensitive equality
  ("Mini P.E.K.K.A" -> "minipekka").
- slug form: lowercase, ``&`` -> ``and``, runs of anything outside
  [a-z0-9] collapsed to one hyphen, no leading/trailing hyphen.
  Used for catalog keys and URLs ("The Log" -> "the-log").

The two forms do not round-trip into each other. Every stored key must
be produced by the same function that is used to look it up.
"""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")
_HYPHEN_RUN = re.compile(r"-+")


def normalize_for_join(name: str) -> str:
    """Return the join form of ``name`` (only [a-z0-9] characters)."""
    return _NON_ALNUM.sub("", name.lower().replace("&", "and"))


def normalize_card_name(name: str) -> str:
    """Return the hyphenated slug form of ``name``."""
    slug = _NON_ALNUM_RUN.sub("-", name.lower().replace("&", "and"))
    slug = _HYPHEN_RUN.sub("-", slug)
    return slug.strip("-")
