"""
Counter guide API endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from deckdoctor.models.counter import CounterStrategy
from deckdoctor.services.catalog_state import get_lookup_index
from deckdoctor.services.counter_guide import get_counter_strategy, list_counter_cards
from deckdoctor.services.lookup_index import LookupIndex

router = APIRouter(prefix="/counter-guide", tags=["counter-guide"])


class CounterGuideRequest(BaseModel):
    card_name: str = Field(..., min_length=1, examples=["Hog Rider"])


class PlacementResponse(BaseModel):
    x: int
    y: int
    card: str
    description: str


class CounterCardResponse(BaseModel):
    card: str
    cost: int
    effectiveness: str
    placement: list[PlacementResponse] = Field(default_factory=list)
    notes: str = ""


class CounterStrategyResponse(BaseModel):
    """Counter advice for one target card."""

    target_card: str
    counter_cards: list[CounterCardResponse]


class CounterCardListResponse(BaseModel):
    cards: list[str]


def strategy_to_response(strategy: CounterStrategy) -> CounterStrategyResponse:
    return CounterStrategyResponse(
        target_card=strategy.target_card,
        counter_cards=[
            CounterCardResponse(
                card=counter.card,
                cost=counter.cost,
                effectiveness=counter.effectiveness,
                placement=[
                    PlacementResponse(
                        x=step.position.x,
                        y=step.position.y,
                        card=step.card,
                        description=step.description,
                    )
                    for step in counter.placement
                ],
                notes=counter.notes,
            )
            for counter in strategy.counter_cards
        ],
    )


@router.post("", response_model=CounterStrategyResponse)
async def get_counter_guide(
    request: CounterGuideRequest,
    index: Annotated[LookupIndex, Depends(get_lookup_index)],
) -> CounterStrategyResponse:
    """
    Get counter advice for a card.

    Returns 404 if there is no advice for the card.
    """
    strategy = get_counter_strategy(request.card_name, index)
    if strategy is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f'No counter strategy found for "{request.card_name}"',
        )
    return strategy_to_response(strategy)


@router.get("/cards", response_model=CounterCardListResponse)
async def get_counter_cards() -> CounterCardListResponse:
    """List display names of all cards with counter advice."""
    return CounterCardListResponse(cards=list_counter_cards())
