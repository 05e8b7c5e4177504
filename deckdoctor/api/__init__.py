from deckdoctor.api.cards import router as cards_router
from deckdoctor.api.counter_guide import router as counter_guide_router
from deckdoctor.api.deck_doctor import router as deck_doctor_router
from deckdoctor.api.health import router as health_router

__all__ = [
    "cards_router",
    "counter_guide_router",
    "deck_doctor_router",
    "health_router",
]
