"""
Card API endpoints.

Lists catalog cards, resolves free-text card names, and reloads the
catalog from disk.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel, Field

from deckdoctor.models.card import CardInfo
from deckdoctor.services.catalog_state import (
    build_lookup_index,
    get_lookup_index,
    install_lookup_index,
)
from deckdoctor.services.lookup_index import LookupIndex
from deckdoctor.services.normalizer import normalize_card_name

router = APIRouter(prefix="/cards", tags=["cards"])


class CardResponse(BaseModel):
    """Response model for a single card."""

    key: str
    name: str
    slug: str
    type: str
    rarity: str | None = None
    elixir: int
    roles: list[str] = Field(default_factory=list)
    targets: str | None = None


class CardListResponse(BaseModel):
    """Response model for the card list."""

    cards: list[CardResponse]
    count: int


class ReloadResponse(BaseModel):
    """Response model for a catalog reload."""

    cards: int


def card_to_response(card: CardInfo) -> CardResponse:
    return CardResponse(
        key=card.key,
        name=card.name,
        slug=normalize_card_name(card.name),
        type=card.type,
        rarity=card.rarity,
        elixir=card.elixir,
        roles=[role.value for role in card.roles],
        targets=card.targets.value if card.targets else None,
    )


@router.get("", response_model=CardListResponse)
async def list_cards(
    index: Annotated[LookupIndex, Depends(get_lookup_index)],
) -> CardListResponse:
    """
    List every catalog card.

    Cards are sorted by display name.
    """
    cards = sorted(index.catalog.cards.values(), key=lambda c: c.name)
    return CardListResponse(
        cards=[card_to_response(card) for card in cards],
        count=len(cards),
    )


@router.get("/resolve", response_model=CardResponse)
async def resolve_card(
    index: Annotated[LookupIndex, Depends(get_lookup_index)],
    name: Annotated[str, Query(min_length=1, max_length=100)],
) -> CardResponse:
    """
    Resolve a free-text card name to a catalog card.

    Returns 404 if no card matches.
    """
    card = index.resolve(name)
    if card is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Card '{name}' not found",
        )
    return card_to_response(card)


@router.post("/reload", response_model=ReloadResponse)
def reload_cards(request: Request) -> ReloadResponse:
    """
    Rebuild the catalog from the data directory.

    The new catalog replaces the old one only after it is fully built.
    Plain def: the file reads run in the threadpool, off the event loop.
    """
    index = build_lookup_index()
    install_lookup_index(request.app, index)
    return ReloadResponse(cards=len(index.catalog))
