from ygodeck.api.decks import router as decks_router
from ygodeck.api.health import router as health_router

__all__ = [
    "decks_router",
    "health_router",
]
