"""
Deck Doctor API endpoint.

Scores an 8-card deck against the deck rubric.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from deckdoctor.models.analysis import DeckAnalysis
from deckdoctor.services.catalog_state import get_lookup_index
from deckdoctor.services.lookup_index import LookupIndex
from deckdoctor.services.rubric import analyze_deck

router = APIRouter(prefix="/deck-doctor", tags=["deck-doctor"])


class AnalyzeRequest(BaseModel):
    """Request model for deck analysis."""

    cards: list[str] = Field(
        ...,
        description="Exactly 8 card names, as entered by the user",
        examples=[
            [
                "Hog Rider",
                "Musketeer",
                "Cannon",
                "Ice Spirit",
                "Skeletons",
                "Fireball",
                "The Log",
                "Ice Golem",
            ]
        ],
    )


class CheckResultResponse(BaseModel):
    """Outcome of one rubric check."""

    passed: bool
    message: str
    severity: str


class DeckAnalysisResponse(BaseModel):
    """Rubric result for a deck."""

    grade: str
    score: int = Field(ge=0, le=100)
    avg_elixir: float
    issues: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    check_results: dict[str, CheckResultResponse] = Field(default_factory=dict)


class AnalyzeResponse(BaseModel):
    """Response model for deck analysis."""

    analysis: DeckAnalysisResponse


def analysis_to_response(analysis: DeckAnalysis) -> DeckAnalysisResponse:
    return DeckAnalysisResponse(
        grade=analysis.grade.value,
        score=analysis.score,
        avg_elixir=analysis.avg_elixir,
        issues=list(analysis.issues),
        strengths=list(analysis.strengths),
        recommendations=list(analysis.recommendations),
        check_results={
            name.value: CheckResultResponse(
                passed=result.passed,
                message=result.message,
                severity=result.severity.value,
            )
            for name, result in analysis.check_results.items()
        },
    )


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    request: AnalyzeRequest,
    index: Annotated[LookupIndex, Depends(get_lookup_index)],
) -> AnalyzeResponse:
    """
    Grade a deck of 8 cards.

    Returns 400 with the validation message if the deck does not have
    exactly 8 cards or contains unknown card names.
    """
    analysis = analyze_deck(request.cards, index)
    return AnalyzeResponse(analysis=analysis_to_response(analysis))
